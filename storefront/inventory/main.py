from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator
from storefront.version import VERSION
from storefront.inventory.api import routes
from storefront.inventory.core.config import settings
from storefront.inventory.messaging import consumer
from storefront.common.errors import register_exception_handlers
from storefront.common.health import health_router
from storefront.common.logging import configure_logging, get_logger

configure_logging('inventory')
logger = get_logger(__name__)

instrumentator = Instrumentator()

app = FastAPI(title='Inventory Service', version=VERSION)

instrumentator.instrument(app).expose(
    app,
    include_in_schema=False,
    endpoint="/inventory/metrics",
    should_gzip=True,
)

register_exception_handlers(app)

@app.on_event("startup")
async def startup_event():
    if settings.CONSUMER_ENABLED:
        consumer.start()
    else:
        logger.info("consumer_disabled")

@app.on_event("shutdown")
async def shutdown_event():
    consumer.stop()

app.include_router(health_router('inventory', 'Inventory Service', '/api/v1/inventory/health'))
app.include_router(routes.router, prefix='/api/v1/inventory', tags=['inventory'])
