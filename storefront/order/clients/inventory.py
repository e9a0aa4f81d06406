from typing import Iterable
import httpx
from storefront.order.core.config import settings
from storefront.common.logging import get_logger

logger = get_logger(__name__)

class InventoryClient:
    """Stock reservation against the inventory service.

    While ``INVENTORY_RESERVATION_ENABLED`` is off every reservation succeeds.
    """

    def __init__(self, base_url: str = None, enabled: bool = None, timeout: float = 5.0,
                 transport: httpx.BaseTransport = None):
        self.base_url = base_url or settings.INVENTORY_BASE
        self.enabled = settings.INVENTORY_RESERVATION_ENABLED if enabled is None else enabled
        self.timeout = timeout
        self.transport = transport

    def reserve_stock(self, items: Iterable) -> bool:
        payload = {"items": [{"sku": it.sku, "quantity": it.quantity or 0} for it in items]}
        if not self.enabled:
            logger.debug("reservation_skipped", skus=[i["sku"] for i in payload["items"]])
            return True
        with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
            resp = client.post(
                f"{self.base_url}/api/v1/inventory/reserve",
                json=payload,
                headers={"X-Internal-Key": settings.SVC_INTERNAL_KEY},
            )
        if resp.status_code == 200:
            return True
        if resp.status_code == 409:
            logger.info("reservation_rejected", detail=resp.text)
            return False
        resp.raise_for_status()
        # 1xx/3xx are not a valid answer either
        raise httpx.HTTPStatusError(f"Unexpected status {resp.status_code}", request=resp.request, response=resp)

inventory_client = InventoryClient()
