from typing import List
from sqlalchemy import select, func
from sqlalchemy.orm import Session
from storefront.catalog.db.models import Category, Product
from storefront.catalog.schemas import CategoryCreate, CategoryUpdate
from storefront.common.errors import (
    BusinessRuleError,
    CategoryNotFoundError,
    DuplicateCategoryError,
    InvalidInputError,
)
from storefront.common.logging import get_logger

logger = get_logger(__name__)

def _require_positive(category_id: int):
    if category_id is None or category_id <= 0:
        raise InvalidInputError("Category ID must be a positive number")

def _name_taken(db: Session, name: str) -> bool:
    return db.execute(select(Category.id).where(Category.name == name)).first() is not None

def get_category(db: Session, category_id: int) -> Category:
    _require_positive(category_id)
    obj = db.get(Category, category_id)
    if not obj:
        raise CategoryNotFoundError(f"Category not found with ID: {category_id}")
    return obj

def list_categories(db: Session) -> List[Category]:
    return db.execute(select(Category).order_by(Category.name)).scalars().all()

def create_category(db: Session, payload: CategoryCreate) -> Category:
    logger.info("creating_category", name=payload.name)
    if _name_taken(db, payload.name):
        raise DuplicateCategoryError(f"Category with name '{payload.name}' already exists")
    obj = Category(name=payload.name, description=payload.description or '')
    db.add(obj); db.commit(); db.refresh(obj)
    logger.info("category_created", category_id=obj.id)
    return obj

def update_category(db: Session, category_id: int, payload: CategoryUpdate) -> Category:
    obj = get_category(db, category_id)
    if obj.name != payload.name and _name_taken(db, payload.name):
        raise DuplicateCategoryError(f"Category with name '{payload.name}' already exists")
    obj.name = payload.name
    obj.description = payload.description or ''
    db.add(obj); db.commit(); db.refresh(obj)
    logger.info("category_updated", category_id=obj.id)
    return obj

def delete_category(db: Session, category_id: int) -> None:
    obj = get_category(db, category_id)
    in_use = db.execute(select(func.count(Product.id)).where(Product.category_id == obj.id)).scalar_one()
    if in_use:
        logger.warning("category_delete_blocked", category_id=category_id, products=in_use)
        raise BusinessRuleError("Cannot delete category with existing products. Please move or delete products first.")
    db.delete(obj); db.commit()
    logger.info("category_deleted", category_id=category_id)
