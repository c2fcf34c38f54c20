import logging
from typing import Any, Dict, List, Tuple
from agroscan.core.database import mongodb
from agroscan.models.schemas import ChatTurn, MessageRole
from agroscan.services.database_service import save_to_mongodb

logger = logging.getLogger(__name__)

SESSIONS = "chat_sessions"
MESSAGES = "chat_messages"

USER_SENDER = "user"
AI_SENDER = "ai"


async def get_or_create_session(user_id: str) -> str:
    db = mongodb.get_database()

    session = await db[SESSIONS].find_one({"user_id": user_id, "ended_at": None})
    if session:
        return str(session["_id"])

    session_id = await save_to_mongodb(SESSIONS, {"user_id": user_id, "ended_at": None})
    logger.info(f"Started chat session {session_id} for user {user_id}")
    return session_id


async def get_recent_turns(user_id: str, limit: int) -> List[ChatTurn]:
    """Most recent `limit` messages of the user, oldest first."""
    if limit <= 0:
        return []

    db = mongodb.get_database()
    cursor = db[MESSAGES].find({"user_id": user_id}).sort("_id", -1).limit(limit)
    rows = await cursor.to_list(length=limit)

    turns = []
    for row in reversed(rows):
        role = MessageRole.USER if row.get("sender") == USER_SENDER else MessageRole.ASSISTANT
        turns.append(ChatTurn(role=role, content=row.get("message", "")))
    return turns


async def save_message(session_id: str, user_id: str, message: str, sender: str) -> str:
    return await save_to_mongodb(MESSAGES, {
        "session_id": session_id,
        "user_id": user_id,
        "message": message,
        "sender": sender
    })


async def get_history_page(user_id: str, limit: int, offset: int) -> Tuple[List[Dict[str, Any]], int]:
    db = mongodb.get_database()
    collection = db[MESSAGES]

    cursor = collection.find({"user_id": user_id}).sort("_id", 1).skip(offset).limit(limit)

    rows = []
    async for doc in cursor:
        rows.append({
            "id": str(doc["_id"]),
            "sender": doc["sender"],
            "message": doc["message"],
            "timestamp": doc["created_at"]
        })

    total = await collection.count_documents({"user_id": user_id})
    return rows, total


async def clear_history(user_id: str) -> int:
    db = mongodb.get_database()
    result = await db[MESSAGES].delete_many({"user_id": user_id})
    return result.deleted_count


async def delete_user_chats(user_id: str) -> None:
    db = mongodb.get_database()
    await db[MESSAGES].delete_many({"user_id": user_id})
    await db[SESSIONS].delete_many({"user_id": user_id})
