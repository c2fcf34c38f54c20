import logging
import uuid
from fastapi import APIRouter, HTTPException
from agroscan.models.schemas import UserCreate, UserUpdate, AddressUpdate, UserResponse
from agroscan.core.database import mongodb
from agroscan.services import chat_service
from agroscan.services.database_service import utc_now

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users", tags=["users"])


async def _get_user_or_404(db, user_id: str) -> dict:
    user = await db.users.find_one({"user_id": user_id})
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    user.pop('_id', None)
    return user


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(user: UserCreate):
    """
    Create a user profile with a generated user_id (UID).
    Usernames are unique.
    """
    try:
        db = mongodb.get_database()

        if await db.users.find_one({"username": user.username}):
            raise HTTPException(status_code=409, detail="Username already taken")

        user_doc = {
            "user_id": str(uuid.uuid4()),
            **user.model_dump(),
            "created_at": utc_now()
        }

        await db.users.insert_one(user_doc)
        user_doc.pop('_id', None)

        return UserResponse(**user_doc)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Create user error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create user")


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str):
    try:
        db = mongodb.get_database()
        return UserResponse(**await _get_user_or_404(db, user_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Fetch user error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch user")


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(user_id: str, update: UserUpdate):
    try:
        db = mongodb.get_database()

        clash = await db.users.find_one({"username": update.username})
        if clash and clash["user_id"] != user_id:
            raise HTTPException(status_code=409, detail="Username already taken")

        result = await db.users.update_one({"user_id": user_id}, {"$set": update.model_dump()})
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="User not found")

        return UserResponse(**await _get_user_or_404(db, user_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Update user error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update user")


@router.put("/{user_id}/address", response_model=UserResponse)
async def update_address(user_id: str, address: AddressUpdate):
    try:
        db = mongodb.get_database()

        result = await db.users.update_one({"user_id": user_id}, {"$set": address.model_dump()})
        if result.matched_count == 0:
            raise HTTPException(status_code=404, detail="User not found")

        return UserResponse(**await _get_user_or_404(db, user_id))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Update address error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update address")


@router.delete("/{user_id}")
async def delete_user(user_id: str):
    """
    Delete a user together with their lands and chat history.
    """
    try:
        db = mongodb.get_database()
        await _get_user_or_404(db, user_id)

        lands_result = await db.lands.delete_many({"user_id": user_id})
        await chat_service.delete_user_chats(user_id)
        await db.users.delete_one({"user_id": user_id})

        logger.info(f"Deleted user {user_id} and {lands_result.deleted_count} lands")
        return {
            "message": "User deleted successfully",
            "deleted_lands": lands_result.deleted_count
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Delete user error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete user")
