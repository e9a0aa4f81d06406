"""Checkout: cart validation, stock reservation, order persistence, payment.

Nothing is written until the requested items have been matched against the
cart and stock has been reserved. The order is saved before the payment
session is opened, so a gateway failure leaves an order in PAYMENT_FAILED.
"""
from decimal import Decimal
from typing import List
from sqlalchemy.orm import Session
from storefront.order.clients.inventory import inventory_client
from storefront.order.db.models import Order, OrderItem, OrderStatus
from storefront.order.schemas import CheckoutItem, CheckoutRequest, CheckoutResponse
from storefront.order.services import cart as carts
from storefront.order.services.payments import process_payment
from storefront.common.errors import ItemNotFoundError, OrderNotFoundError
from storefront.common.logging import get_logger

logger = get_logger(__name__)

def calculate_total(items: List[CheckoutItem]) -> Decimal:
    return sum(
        ((it.unit_price or Decimal("0")) * (it.quantity or 0) for it in items),
        Decimal("0"),
    )

def checkout(db: Session, req: CheckoutRequest) -> CheckoutResponse:
    if not req.items:
        return CheckoutResponse(status=OrderStatus.FAILED.value, message="Cart is empty")

    cart = carts.find_cart(db, req.customer_id)
    if cart is None:
        return CheckoutResponse(status=OrderStatus.FAILED.value,
                                message=f"Cart not found for customerId: {req.customer_id}")

    in_cart = {it.sku for it in cart.items}
    missing = [it.sku for it in req.items if it.sku not in in_cart]
    if missing:
        raise ItemNotFoundError(f"Missing cart items: {missing}")

    total = calculate_total(req.items)

    if not inventory_client.reserve_stock(req.items):
        logger.info("checkout_insufficient_stock", customer_id=req.customer_id)
        return CheckoutResponse(status=OrderStatus.FAILED.value,
                                message="Insufficient stock for one or more items", total=total)

    order = Order(customer_id=req.customer_id, total_amount=total, status=OrderStatus.CREATED)
    for it in req.items:
        order.items.append(OrderItem(
            sku=it.sku,
            product_name=it.product_name,
            unit_price=it.unit_price or Decimal("0"),
            quantity=it.quantity or 0,
        ))
    db.add(order); db.commit(); db.refresh(order)
    logger.info("order_created", order_id=order.id, customer_id=req.customer_id, total=str(total))

    return process_payment(db, order, total)

def get_order(db: Session, order_id: int) -> Order:
    order = db.get(Order, order_id)
    if not order:
        raise OrderNotFoundError(f"Order not found with ID: {order_id}")
    return order
