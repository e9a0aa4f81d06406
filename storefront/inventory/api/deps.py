from typing import Optional
from fastapi import Header
from storefront.inventory.db.session import SessionLocal
from storefront.inventory.core.config import settings
from storefront.common.errors import UnauthorizedError

def get_db():
    db = SessionLocal()
    try: yield db
    finally: db.close()

def require_internal(x_internal_key: Optional[str] = Header(default=None, alias="X-Internal-Key")):
    if not x_internal_key or x_internal_key != (settings.SVC_INTERNAL_KEY or ""):
        raise UnauthorizedError("Unauthorized")
    return True
