import datetime
from typing import Dict, Any
from agroscan.core.database import mongodb


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


async def save_to_mongodb(collection_name: str, data: Dict[str, Any]) -> str:
    db = mongodb.get_database()
    collection = db[collection_name]

    document = {
        **data,
        "created_at": utc_now()
    }

    result = await collection.insert_one(document)
    return str(result.inserted_id)


def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
    # Mongo's _id is exposed to clients as a plain string id
    data = dict(doc)
    data["id"] = str(data.pop("_id"))
    return data
