import logging
from fastapi import APIRouter, HTTPException
from bson import ObjectId
from bson.errors import InvalidId
from agroscan.models.schemas import OrderRequest, OrderUpdate
from agroscan.core.database import mongodb
from agroscan.services.database_service import serialize_document, utc_now

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/users/{user_id}/orders", tags=["orders"])
admin_router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("")
async def get_orders(user_id: str):
    db = mongodb.get_database()

    try:
        cursor = db["orders"].find({"user_id": user_id}).sort("created_at", -1)
        return [serialize_document(doc) async for doc in cursor]
    except Exception as e:
        logger.error(f"Fetch orders error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch orders")


@router.post("", status_code=201)
async def place_order(user_id: str, order: OrderRequest):
    if not order.items:
        raise HTTPException(status_code=400, detail="Order items required")

    db = mongodb.get_database()
    created_at = utc_now()

    # One document per ordered item
    documents = [
        {
            "user_id": user_id,
            "customer_name": order.name,
            "customer_phone": order.phone,
            "product_name": item.name,
            "quantity": item.qty,
            "unit_price": item.price,
            "item_total": item.qty * item.price,
            "address": order.address,
            "payment_method": order.payment_method,
            "coupon_code": order.coupon_code,
            "created_at": created_at
        }
        for item in order.items
    ]

    try:
        await db["orders"].insert_many(documents)
    except Exception as e:
        logger.error(f"Place order error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to place order")

    logger.info(f"Placed order of {len(documents)} items for user {user_id}")
    return {"message": "Order placed successfully!"}


@admin_router.get("")
async def get_all_orders():
    db = mongodb.get_database()

    try:
        cursor = db["orders"].find({}).sort("created_at", -1)
        return [serialize_document(doc) async for doc in cursor]
    except Exception as e:
        logger.error(f"Fetch all orders error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch orders")


@admin_router.put("/{order_id}")
async def update_order(order_id: str, update: OrderUpdate):
    try:
        order_filter = {"_id": ObjectId(order_id)}
    except (InvalidId, TypeError):
        raise HTTPException(status_code=400, detail="Invalid order_id format")

    # Only the fields sent in the request are changed
    field_names = {
        "customer": "customer_name",
        "product": "product_name",
        "quantity": "quantity",
        "status": "status"
    }
    changes = {field_names[key]: value for key, value in update.model_dump(exclude_unset=True).items()}
    if not changes:
        raise HTTPException(status_code=400, detail="Nothing to update")

    db = mongodb.get_database()

    try:
        order = await db["orders"].find_one(order_filter)
        if order and changes.get("quantity") is not None:
            changes["item_total"] = changes["quantity"] * order.get("unit_price", 0)
        result = await db["orders"].update_one(order_filter, {"$set": changes})
    except Exception as e:
        logger.error(f"Update order error: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update order")

    if result.matched_count == 0:
        raise HTTPException(status_code=404, detail="Order not found")

    return {"message": "Order updated successfully!"}
