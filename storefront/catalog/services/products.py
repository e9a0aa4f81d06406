"""Product lifecycle: supplier edits, customer reads, steward review.

A product is created PENDING and stays editable until a reviewer moves it to
APPROVED or REJECTED; both are terminal.
"""
from datetime import datetime
from typing import List
from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session
from storefront.catalog.db.models import Category, Product, ProductStatus
from storefront.catalog.messaging import producer
from storefront.catalog.schemas import ProductCreate, ProductUpdate, ReviewRequest, ProductCreatedEvent
from storefront.common.errors import (
    BusinessRuleError,
    CategoryNotFoundError,
    DuplicateSkuError,
    InvalidInputError,
    ProductNotFoundError,
)
from storefront.common.logging import get_logger

logger = get_logger(__name__)

REVIEW_STATUSES = (ProductStatus.APPROVED, ProductStatus.REJECTED)

def _sku_taken(db: Session, sku: str) -> bool:
    return db.execute(select(Product.id).where(Product.sku == sku)).first() is not None

def _category_by_name(db: Session, name: str) -> Category:
    name = name.strip()
    obj = db.execute(select(Category).where(Category.name == name)).scalar_one_or_none()
    if not obj:
        raise CategoryNotFoundError(f"Category not found with name: {name}")
    return obj

def _require_pending(product: Product, action: str):
    if product.status != ProductStatus.PENDING:
        raise BusinessRuleError(
            f"Cannot {action} product that has been reviewed (status: {product.status.value})"
        )

def parse_status(value: str) -> ProductStatus:
    try:
        return ProductStatus(value.strip().upper())
    except (ValueError, AttributeError):
        raise InvalidInputError(f"Invalid status: {value}. Valid statuses are: PENDING, APPROVED, REJECTED")

def get_product(db: Session, product_id: int) -> Product:
    if product_id is None or product_id <= 0:
        raise InvalidInputError("Product ID must be a positive number")
    obj = db.get(Product, product_id)
    if not obj:
        raise ProductNotFoundError(f"Product not found with ID: {product_id}")
    return obj

def _approved():
    return select(Product).outerjoin(Category).where(Product.status == ProductStatus.APPROVED)

def list_products(db: Session) -> List[Product]:
    return db.execute(select(Product).order_by(Product.id)).scalars().all()

def list_approved(db: Session) -> List[Product]:
    return db.execute(_approved().order_by(Product.id)).scalars().all()

def list_by_status(db: Session, status: str) -> List[Product]:
    st = parse_status(status)
    return db.execute(select(Product).where(Product.status == st).order_by(Product.id)).scalars().all()

def list_by_category_name(db: Session, category_name: str) -> List[Product]:
    if not category_name or not category_name.strip():
        raise InvalidInputError("Category name cannot be null or empty")
    stmt = _approved().where(func.lower(Category.name) == category_name.strip().lower())
    return db.execute(stmt.order_by(Product.id)).scalars().all()

def search_products(db: Session, value: str) -> List[Product]:
    if value is None or not value.strip():
        raise InvalidInputError("Search value cannot be null or empty")
    value = value.strip()
    if len(value) < 2:
        raise InvalidInputError("Search value must be at least 2 characters long")
    q_like = f"%{value.lower()}%"
    stmt = (
        select(Product)
        .outerjoin(Category)
        .where(or_(
            func.lower(Product.name).like(q_like),
            func.lower(Product.brand).like(q_like),
            func.lower(Product.sku).like(q_like),
            func.lower(Category.name).like(q_like),
        ))
        .order_by(Product.id)
    )
    products = db.execute(stmt).scalars().all()
    logger.info("products_searched", value=value, matches=len(products))
    return products

def _publish_created(product: Product):
    event = ProductCreatedEvent(
        product_id=str(product.id),
        sku=product.sku,
        name=product.name,
        price=product.price,
        description=product.description,
        brand=product.brand,
        category_name=product.category_name,
        initial_quantity=product.stock_quantity or 0,
        timestamp=datetime.utcnow(),
    )
    try:
        producer.publish_product_created(event.model_dump(mode="json"))
    except Exception as exc:
        # inventory for this SKU has to be reconciled by hand
        logger.error("product_created_publish_failed", sku=product.sku, error=str(exc))

def create_product(db: Session, payload: ProductCreate) -> Product:
    logger.info("creating_product", name=payload.name, sku=payload.sku)
    if _sku_taken(db, payload.sku):
        logger.warning("duplicate_sku", sku=payload.sku)
        raise DuplicateSkuError(f"Product with SKU '{payload.sku}' already exists")
    category = _category_by_name(db, payload.category_name)
    obj = Product(**payload.model_dump(exclude={"category_name"}), category=category, status=ProductStatus.PENDING)
    db.add(obj); db.commit(); db.refresh(obj)
    logger.info("product_created", product_id=obj.id, sku=obj.sku)
    _publish_created(obj)
    return obj

def update_product(db: Session, product_id: int, payload: ProductUpdate) -> Product:
    obj = get_product(db, product_id)
    _require_pending(obj, "update")
    if obj.sku != payload.sku and _sku_taken(db, payload.sku):
        raise DuplicateSkuError(f"Product with SKU '{payload.sku}' already exists")
    for k, v in payload.model_dump(exclude={"category_name"}).items():
        setattr(obj, k, v)
    if obj.category_name != payload.category_name.strip():
        obj.category = _category_by_name(db, payload.category_name)
    db.add(obj); db.commit(); db.refresh(obj)
    logger.info("product_updated", product_id=obj.id)
    return obj

def delete_product(db: Session, product_id: int) -> None:
    obj = get_product(db, product_id)
    _require_pending(obj, "delete")
    db.delete(obj); db.commit()
    logger.info("product_deleted", product_id=product_id)

def review_product(db: Session, product_id: int, status: str, review: ReviewRequest) -> Product:
    new_status = parse_status(status)
    if new_status not in REVIEW_STATUSES:
        raise InvalidInputError("Status must be either APPROVED or REJECTED")
    obj = get_product(db, product_id)
    if obj.status != ProductStatus.PENDING:
        raise BusinessRuleError(f"Product has already been reviewed (status: {obj.status.value})")
    obj.status = new_status
    db.add(obj); db.commit(); db.refresh(obj)
    logger.info(
        "product_reviewed",
        product_id=obj.id,
        status=new_status.value,
        reviewed_by=review.reviewed_by,
        comment=review.review_comment,
    )
    return obj
