from typing import Annotated
from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session
from storefront.order.api.deps import get_db
from storefront.order.schemas import CartCreate, CartItemAdd, CartRead
from storefront.order.services import cart as service
from storefront.common.responses import ok, created, deleted

router = APIRouter()

CustomerId = Annotated[str, Path(min_length=1, max_length=50)]
Sku = Annotated[str, Path(min_length=2, max_length=50)]

@router.post('/', status_code=201)
def create_cart(payload: CartCreate, db: Session = Depends(get_db)):
    cart = service.create_cart(db, payload.customer_id)
    return created(CartRead.model_validate(cart), 'Cart created successfully')

@router.get('/customer/{customer_id}')
def get_cart_by_customer(customer_id: CustomerId, db: Session = Depends(get_db)):
    return ok(CartRead.model_validate(service.get_cart(db, customer_id)), 'Cart retrieved successfully')

@router.get('/{customer_id}')
def get_cart(customer_id: CustomerId, db: Session = Depends(get_db)):
    return ok(CartRead.model_validate(service.get_cart(db, customer_id)), 'Cart retrieved successfully')

@router.post('/{customer_id}')
def add_item(payload: CartItemAdd, customer_id: CustomerId, db: Session = Depends(get_db)):
    cart = service.add_item(db, customer_id, payload)
    return ok(CartRead.model_validate(cart), 'Item added to cart successfully')

@router.delete('/{customer_id}/{sku}')
def remove_item(customer_id: CustomerId, sku: Sku, db: Session = Depends(get_db)):
    cart = service.remove_item(db, customer_id, sku)
    return ok(CartRead.model_validate(cart), 'Item removed from cart successfully')

@router.delete('/{customer_id}')
def remove_cart(customer_id: CustomerId, db: Session = Depends(get_db)):
    service.remove_cart(db, customer_id)
    return deleted('Cart removed successfully')
