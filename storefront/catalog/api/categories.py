from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from storefront.catalog.api.deps import get_db
from storefront.catalog.schemas import CategoryCreate, CategoryUpdate, CategoryRead
from storefront.catalog.services import categories as service
from storefront.common.responses import ok, created, deleted

router = APIRouter()

def _read(obj):
    return CategoryRead.model_validate(obj)

@router.get('/')
def list_categories(db: Session = Depends(get_db)):
    items = [_read(c) for c in service.list_categories(db)]
    return ok(items, 'Categories retrieved successfully')

@router.post('/', status_code=201)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    return created(_read(service.create_category(db, payload)), 'Category created successfully')

@router.get('/{category_id}')
def get_category(category_id: int, db: Session = Depends(get_db)):
    return ok(_read(service.get_category(db, category_id)), 'Category retrieved successfully')

@router.put('/{category_id}')
def update_category(category_id: int, payload: CategoryUpdate, db: Session = Depends(get_db)):
    return ok(_read(service.update_category(db, category_id, payload)), 'Category updated successfully')

@router.delete('/{category_id}')
def delete_category(category_id: int, db: Session = Depends(get_db)):
    service.delete_category(db, category_id)
    return deleted('Category deleted successfully')
