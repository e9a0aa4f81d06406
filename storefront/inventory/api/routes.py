from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from storefront.inventory.api.deps import get_db, require_internal
from storefront.inventory.schemas import InventoryCreate, InventoryUpdate, InventoryRead, ReserveRequest
from storefront.inventory.services import inventory as service
from storefront.common.responses import ok, created

router = APIRouter()

@router.post('/', status_code=201)
def create_inventory(payload: InventoryCreate, db: Session = Depends(get_db)):
    inv = service.create_inventory_for_product(db, payload.sku, payload.quantity)
    return created(InventoryRead.model_validate(inv), 'Inventory created successfully')

@router.get('/')
def list_inventories(db: Session = Depends(get_db)):
    items = [InventoryRead.model_validate(i) for i in service.list_inventories(db)]
    return ok(items, 'Inventories retrieved successfully')

@router.post('/reserve')
def reserve(req: ReserveRequest, db: Session = Depends(get_db), _=Depends(require_internal)):
    service.reserve(db, req.items)
    return ok({"reserved": True}, 'Stock reserved successfully')

@router.get('/{sku}/exists')
def inventory_exists(sku: str, db: Session = Depends(get_db)):
    return ok({"sku": sku, "exists": service.inventory_exists(db, sku)}, 'Inventory existence checked')

@router.get('/{sku}')
def get_inventory(sku: str, db: Session = Depends(get_db)):
    return ok(InventoryRead.model_validate(service.get_inventory(db, sku)), 'Inventory retrieved successfully')

@router.put('/{sku}')
def update_inventory(sku: str, payload: InventoryUpdate, db: Session = Depends(get_db)):
    inv = service.update_quantity(db, sku, payload.quantity)
    return ok(InventoryRead.model_validate(inv), 'Inventory updated successfully')
