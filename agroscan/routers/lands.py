import logging
from typing import List
from bson import ObjectId
from bson.errors import InvalidId
from fastapi import APIRouter, HTTPException
from agroscan.models.schemas import LandInput, LandResponse
from agroscan.core.database import mongodb
from agroscan.services.database_service import save_to_mongodb, serialize_document
from agroscan.services.rule_engine import evaluate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users/{user_id}/lands", tags=["lands"])


def _land_filter(user_id: str, land_id: str) -> dict:
    try:
        return {"_id": ObjectId(land_id), "user_id": user_id}
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail="Invalid land_id format")


async def _find_land(user_id: str, land_id: str) -> dict:
    db = mongodb.get_database()
    doc = await db["lands"].find_one(_land_filter(user_id, land_id))
    if not doc:
        raise HTTPException(status_code=404, detail="Land not found")
    return doc


@router.get("", response_model=List[LandResponse])
async def get_lands(user_id: str):
    db = mongodb.get_database()

    try:
        cursor = db["lands"].find({"user_id": user_id}).sort("created_at", -1)

        lands = []
        async for doc in cursor:
            lands.append(LandResponse(**serialize_document(doc)))

        return lands
    except Exception as e:
        logger.error(f"Fetch lands error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch lands")


@router.get("/{land_id}", response_model=LandResponse)
async def get_land(user_id: str, land_id: str):
    doc = await _find_land(user_id, land_id)
    return LandResponse(**serialize_document(doc))


@router.get("/{land_id}/advisory")
async def get_land_advisory(user_id: str, land_id: str):
    doc = await _find_land(user_id, land_id)

    if doc.get("ph") is None or doc.get("moisture") is None:
        raise HTTPException(status_code=400, detail="Land has no pH and moisture readings")

    return {
        "id": land_id,
        "ruleEngine": evaluate(doc["ph"], doc["moisture"], doc.get("temperature"))
    }


@router.post("", status_code=201)
async def add_land(user_id: str, land: LandInput):
    if not land.land_name or not land.size:
        raise HTTPException(status_code=400, detail="land_name and size are required")

    try:
        land_id = await save_to_mongodb("lands", {"user_id": user_id, **land.model_dump()})
        return {"id": land_id, "message": "Land added successfully"}
    except Exception as e:
        logger.error(f"Add land error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to add land")


@router.put("/{land_id}")
async def update_land(user_id: str, land_id: str, land: LandInput):
    db = mongodb.get_database()
    land_filter = _land_filter(user_id, land_id)

    try:
        result = await db["lands"].update_one(land_filter, {"$set": land.model_dump()})
    except Exception as e:
        logger.error(f"Update land error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update land")

    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Land not found")

    return {"message": "Land updated successfully"}


@router.delete("/{land_id}")
async def delete_land(user_id: str, land_id: str):
    db = mongodb.get_database()
    land_filter = _land_filter(user_id, land_id)

    try:
        result = await db["lands"].delete_one(land_filter)
    except Exception as e:
        logger.error(f"Delete land error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete land")

    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Land not found")

    return {"message": "Land deleted successfully"}
