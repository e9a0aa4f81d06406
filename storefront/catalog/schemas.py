from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from storefront.catalog.db.models import ProductStatus

class CategoryBase(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = ''
class CategoryCreate(CategoryBase): pass
class CategoryUpdate(CategoryBase): pass
class CategoryRead(CategoryBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    class Config: from_attributes = True

class ProductBase(BaseModel):
    name: str = Field(min_length=1, max_length=240)
    description: Optional[str] = ''
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    brand: str = Field(min_length=1, max_length=120)
    sku: str = Field(min_length=1, max_length=64)
    category_name: str = Field(min_length=1)
    image_url: Optional[str] = None
    stock_quantity: int = Field(default=0, ge=0)
class ProductCreate(ProductBase): pass
class ProductUpdate(ProductBase): pass
class ProductRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = ''
    price: Decimal
    brand: str
    sku: str
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    image_url: Optional[str] = None
    stock_quantity: Optional[int] = 0
    status: ProductStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    class Config: from_attributes = True

class ReviewRequest(BaseModel):
    review_comment: Optional[str] = Field(default=None, max_length=500)
    reviewed_by: Optional[str] = None

class ProductCreatedEvent(BaseModel):
    type: str = 'product.created'
    product_id: str
    sku: str
    name: str
    price: Decimal
    description: Optional[str] = None
    brand: Optional[str] = None
    category_name: Optional[str] = None
    initial_quantity: int = 0
    timestamp: datetime
