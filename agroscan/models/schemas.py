from enum import Enum
from pydantic import BaseModel, Field
from typing import Any, Optional, List
from datetime import datetime


class MessageRole(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatTurn(BaseModel):
    role: MessageRole
    content: str


class UserCreate(BaseModel):
    name: str
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None


class UserUpdate(BaseModel):
    name: str
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None


class AddressUpdate(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class UserResponse(BaseModel):
    user_id: str
    name: str
    username: str
    email: Optional[str] = None
    phone: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    created_at: datetime


class LandInput(BaseModel):
    land_name: Optional[str] = None
    size: Optional[float] = None
    crop: Optional[str] = None
    soil_type: Optional[str] = None
    ph: Optional[float] = None
    moisture: Optional[float] = None
    temperature: Optional[float] = None
    light: Optional[float] = None
    other_info: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None


class LandResponse(LandInput):
    id: str
    created_at: datetime


class OrderItem(BaseModel):
    name: str
    qty: int = Field(..., ge=1)
    price: float = Field(..., ge=0)


class OrderRequest(BaseModel):
    items: List[OrderItem] = []
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    payment_method: Optional[str] = None
    coupon_code: Optional[str] = None


class RecommendRequest(BaseModel):
    ph: Optional[float] = None
    moisture: Optional[float] = None
    temperature: Optional[float] = None
    location: Optional[str] = None
    desired_crop: Optional[str] = Field(None, alias="desiredCrop")


class RecommendResponse(BaseModel):
    ruleEngine: List[str]
    aiResponse: str


class ChatRequest(BaseModel):
    message: Optional[str] = None
    user_id: Optional[str] = Field(None, alias="userId")


class ChatResponse(BaseModel):
    aiResponse: str


class ChatHistoryEntry(BaseModel):
    id: str
    sender: str
    message: str
    timestamp: datetime


class ChatHistoryResponse(BaseModel):
    history: List[ChatHistoryEntry]
    hasMore: bool


class OrderUpdate(BaseModel):
    customer: Optional[str] = None
    product: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=1)
    status: Optional[str] = None


class ControlInput(BaseModel):
    function_name: Optional[str] = None
    value: Any = None


class ControlResponse(BaseModel):
    function_name: str
    value: Any = None
