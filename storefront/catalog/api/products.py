from fastapi import APIRouter, Depends, Query
from typing import Optional
from sqlalchemy.orm import Session
from storefront.catalog.api.deps import get_db
from storefront.catalog.schemas import ProductCreate, ProductUpdate, ProductRead, ReviewRequest
from storefront.catalog.services import products as service
from storefront.common.responses import ok, created, deleted

router = APIRouter()

def _read_all(products):
    return [ProductRead.model_validate(p) for p in products]

# Customer views

@router.get('/approved')
def list_approved(db: Session = Depends(get_db)):
    return ok(_read_all(service.list_approved(db)), 'Approved products retrieved successfully')

@router.get('/categories/{category_name}')
def list_by_category(category_name: str, db: Session = Depends(get_db)):
    products = service.list_by_category_name(db, category_name)
    return ok(_read_all(products), f'Products retrieved for category: {category_name}')

# Steward views

@router.get('/status/{status}')
def list_by_status(status: str, db: Session = Depends(get_db)):
    return ok(_read_all(service.list_by_status(db, status)), 'Products retrieved by status successfully')

@router.get('/')
def list_products(search: Optional[str] = Query(default=None), db: Session = Depends(get_db)):
    if search is not None:
        return ok(_read_all(service.search_products(db, search)), 'Products search completed successfully')
    return ok(_read_all(service.list_products(db)), 'All products retrieved successfully')

@router.get('/{product_id}')
def get_product(product_id: int, db: Session = Depends(get_db)):
    return ok(ProductRead.model_validate(service.get_product(db, product_id)), 'Product retrieved successfully')

# Supplier operations

@router.post('/', status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    obj = service.create_product(db, payload)
    return created(ProductRead.model_validate(obj), 'Product created successfully')

@router.put('/{product_id}')
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    obj = service.update_product(db, product_id, payload)
    return ok(ProductRead.model_validate(obj), 'Product updated successfully')

@router.delete('/{product_id}')
def delete_product(product_id: int, db: Session = Depends(get_db)):
    service.delete_product(db, product_id)
    return deleted('Product deleted successfully')

@router.put('/{product_id}/review')
def review_product(product_id: int, status: str = Query(...), payload: Optional[ReviewRequest] = None,
                   db: Session = Depends(get_db)):
    obj = service.review_product(db, product_id, status, payload or ReviewRequest())
    return ok(ProductRead.model_validate(obj), 'Product reviewed successfully')
