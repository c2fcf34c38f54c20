import logging
from typing import List
from fastapi import APIRouter, HTTPException
from pymongo.errors import DuplicateKeyError
from agroscan.models.schemas import ControlInput, ControlResponse
from agroscan.core.database import mongodb
from agroscan.services.database_service import save_to_mongodb

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/controls", tags=["controls"])

# Controls are feature flags keyed by function_name


@router.get("", response_model=List[ControlResponse])
async def get_controls():
    db = mongodb.get_database()

    try:
        cursor = db["controls"].find({})
        return [ControlResponse(**doc) async for doc in cursor]
    except Exception as e:
        logger.error(f"Fetch controls error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch controls")


@router.get("/{function_name}", response_model=ControlResponse)
async def get_control(function_name: str):
    db = mongodb.get_database()
    doc = await db["controls"].find_one({"function_name": function_name})

    if not doc:
        raise HTTPException(status_code=404, detail="Control not found")

    return ControlResponse(**doc)


@router.post("", status_code=201)
async def add_control(control: ControlInput):
    # An explicit null value is allowed, a missing one is not
    if not control.function_name or "value" not in control.model_fields_set:
        raise HTTPException(status_code=400, detail="Function and Value are required")

    db = mongodb.get_database()
    if await db["controls"].find_one({"function_name": control.function_name}):
        raise HTTPException(status_code=409, detail="Function already exists")

    try:
        control_id = await save_to_mongodb("controls", {
            "function_name": control.function_name,
            "value": control.value
        })
    except DuplicateKeyError:
        raise HTTPException(status_code=409, detail="Function already exists")
    except Exception as e:
        logger.error(f"Add control error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to add control")

    return {"message": "Control added", "id": control_id}


@router.put("/{function_name}")
async def update_control(function_name: str, control: ControlInput):
    if "value" not in control.model_fields_set:
        raise HTTPException(status_code=400, detail="Value is required")

    db = mongodb.get_database()

    try:
        result = await db["controls"].update_one(
            {"function_name": function_name},
            {"$set": {"value": control.value}}
        )
    except Exception as e:
        logger.error(f"Update control error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update control")

    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Control not found")

    return {"message": "Control updated successfully"}


@router.delete("/{function_name}")
async def delete_control(function_name: str):
    db = mongodb.get_database()

    try:
        result = await db["controls"].delete_one({"function_name": function_name})
    except Exception as e:
        logger.error(f"Delete control error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete control")

    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Control not found")

    return {"message": "Control deleted successfully"}
