from pydantic import BaseModel, Field
from typing import List, Optional
from decimal import Decimal
from datetime import datetime
from storefront.order.db.models import OrderStatus

class CartCreate(BaseModel):
    customer_id: str = Field(min_length=1, max_length=50)

class CartItemAdd(BaseModel):
    sku: str = Field(min_length=2, max_length=50)
    product_name: str = Field(min_length=1, max_length=255)
    unit_price: Decimal = Field(gt=0)
    quantity: int = Field(ge=1)

class CartItemRead(BaseModel):
    id: int
    sku: str
    product_name: str
    unit_price: Decimal
    quantity: int
    subtotal: Decimal
    class Config: from_attributes = True

class CartRead(BaseModel):
    id: int
    customer_id: str
    items: List[CartItemRead] = []
    total_amount: Decimal
    total_items: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    class Config: from_attributes = True

class CheckoutItem(BaseModel):
    sku: str
    product_name: Optional[str] = None
    unit_price: Optional[Decimal] = None
    quantity: Optional[int] = None

class CheckoutRequest(BaseModel):
    customer_id: str = Field(min_length=1, max_length=50)
    items: List[CheckoutItem] = []

class CheckoutResponse(BaseModel):
    order_id: Optional[int] = None
    status: str
    message: str
    total: Optional[Decimal] = None
    session_id: Optional[str] = None
    session_url: Optional[str] = None

class OrderItemRead(BaseModel):
    sku: str
    product_name: Optional[str] = None
    unit_price: Decimal
    quantity: int
    class Config: from_attributes = True

class OrderRead(BaseModel):
    id: int
    customer_id: str
    total_amount: Decimal
    status: OrderStatus
    session_id: Optional[str] = None
    items: List[OrderItemRead] = []
    created_at: Optional[datetime] = None
    class Config: from_attributes = True

class PaymentIn(BaseModel):
    name: str
    amount: int = Field(gt=0, description="Amount in the currency's smallest unit")
    quantity: int = Field(default=1, ge=1)
    currency: Optional[str] = None
    client_reference_id: Optional[str] = None

class PaymentOut(BaseModel):
    status: str
    message: str
    session_id: Optional[str] = None
    session_url: Optional[str] = None
