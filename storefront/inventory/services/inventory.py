from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session
from storefront.inventory.db.models import Inventory
from storefront.inventory.schemas import ReserveItem
from storefront.common.errors import (
    InsufficientStockError,
    InventoryAlreadyExistsError,
    InventoryNotFoundError,
)
from storefront.common.logging import get_logger

logger = get_logger(__name__)

def _find(db: Session, sku: str):
    return db.execute(select(Inventory).where(Inventory.sku == sku)).scalar_one_or_none()

def inventory_exists(db: Session, sku: str) -> bool:
    return db.execute(select(Inventory.id).where(Inventory.sku == sku)).first() is not None

def create_inventory_for_product(db: Session, sku: str, quantity: int) -> Inventory:
    logger.info("creating_inventory", sku=sku, quantity=quantity)
    if inventory_exists(db, sku):
        logger.warning("inventory_exists", sku=sku)
        raise InventoryAlreadyExistsError(f"Inventory already exists for sku: {sku}")
    inv = Inventory(sku=sku, quantity=quantity)
    db.add(inv); db.commit(); db.refresh(inv)
    logger.info("inventory_created", inventory_id=inv.id, sku=inv.sku)
    return inv

def get_inventory(db: Session, sku: str) -> Inventory:
    inv = _find(db, sku)
    if not inv:
        raise InventoryNotFoundError(f"Inventory not found for sku: {sku}")
    return inv

def update_quantity(db: Session, sku: str, quantity: int) -> Inventory:
    inv = get_inventory(db, sku)
    inv.quantity = quantity
    db.add(inv); db.commit(); db.refresh(inv)
    logger.info("inventory_updated", sku=sku, quantity=quantity)
    return inv

def list_inventories(db: Session) -> List[Inventory]:
    return db.execute(select(Inventory).order_by(Inventory.sku)).scalars().all()

def reserve(db: Session, items: List[ReserveItem]) -> None:
    """Take stock for every item or for none of them."""
    for it in items:
        inv = _find(db, it.sku)
        if not inv:
            db.rollback()
            raise InventoryNotFoundError(f"Inventory not found for sku: {it.sku}")
        if inv.quantity < it.quantity:
            db.rollback()
            raise InsufficientStockError(f"Insufficient stock for sku: {it.sku}")
        inv.quantity -= it.quantity
        db.add(inv)
    db.commit()
    logger.info("stock_reserved", skus=[it.sku for it in items])
