from sqlalchemy import select
from sqlalchemy.orm import Session
from storefront.order.db.models import Cart, CartItem
from storefront.order.schemas import CartItemAdd
from storefront.common.errors import CartAlreadyExistsError, CartNotFoundError, ItemNotFoundError
from storefront.common.logging import get_logger

logger = get_logger(__name__)

def find_cart(db: Session, customer_id: str):
    return db.execute(select(Cart).where(Cart.customer_id == customer_id)).scalar_one_or_none()

def get_cart(db: Session, customer_id: str) -> Cart:
    cart = find_cart(db, customer_id)
    if not cart:
        raise CartNotFoundError(f"Cart not found for customer: {customer_id}")
    return cart

def create_cart(db: Session, customer_id: str) -> Cart:
    logger.info("creating_cart", customer_id=customer_id)
    if find_cart(db, customer_id):
        raise CartAlreadyExistsError(f"Cart already exists for customer: {customer_id}")
    cart = Cart(customer_id=customer_id)
    cart.calculate_total()
    db.add(cart); db.commit(); db.refresh(cart)
    logger.info("cart_created", cart_id=cart.id, customer_id=customer_id)
    return cart

def add_item(db: Session, customer_id: str, payload: CartItemAdd) -> Cart:
    cart = get_cart(db, customer_id)
    existing = next((it for it in cart.items if it.sku == payload.sku), None)
    if existing:
        existing.quantity += payload.quantity
        logger.info("cart_item_quantity_updated", customer_id=customer_id, sku=payload.sku, quantity=existing.quantity)
    else:
        cart.items.append(CartItem(
            sku=payload.sku,
            product_name=payload.product_name,
            unit_price=payload.unit_price,
            quantity=payload.quantity,
        ))
        logger.info("cart_item_added", customer_id=customer_id, sku=payload.sku)
    cart.calculate_total()
    db.add(cart); db.commit(); db.refresh(cart)
    return cart

def remove_item(db: Session, customer_id: str, sku: str) -> Cart:
    cart = get_cart(db, customer_id)
    item = next((it for it in cart.items if it.sku == sku), None)
    if not item:
        raise ItemNotFoundError(f"Item not found in cart - SKU: {sku}")
    cart.items.remove(item)
    cart.calculate_total()
    db.add(cart); db.commit(); db.refresh(cart)
    logger.info("cart_item_removed", customer_id=customer_id, sku=sku)
    return cart

def remove_cart(db: Session, customer_id: str) -> None:
    cart = get_cart(db, customer_id)
    db.delete(cart); db.commit()
    logger.info("cart_removed", customer_id=customer_id)
