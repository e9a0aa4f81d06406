from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

class InventoryCreate(BaseModel):
    sku: str = Field(min_length=1, max_length=64)
    quantity: int = Field(default=0, ge=0)

class InventoryUpdate(BaseModel):
    quantity: int = Field(ge=0)

class InventoryRead(BaseModel):
    id: int
    sku: str
    quantity: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    class Config: from_attributes = True

class ReserveItem(BaseModel):
    sku: str
    quantity: int = Field(ge=1)

class ReserveRequest(BaseModel):
    items: List[ReserveItem]
