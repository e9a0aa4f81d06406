from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator
from storefront.version import VERSION
from storefront.catalog.api import products, categories
from storefront.common.errors import register_exception_handlers
from storefront.common.health import health_router
from storefront.common.logging import configure_logging, get_logger

configure_logging('catalog')
logger = get_logger(__name__)

instrumentator = Instrumentator()

app = FastAPI(title='Catalog Service', version=VERSION)

instrumentator.instrument(app).expose(
    app,
    include_in_schema=False,
    endpoint="/catalog/metrics",
    should_gzip=True,
)

register_exception_handlers(app)

@app.on_event("startup")
async def startup_event():
    for route in app.routes:
        if hasattr(route, "methods") and hasattr(route, "path"):
            logger.debug("route_registered", methods=sorted(route.methods), path=route.path)

app.include_router(health_router('catalog', 'Product Service', '/api/v1/products/health', '/api/v1/categories/health'))
app.include_router(categories.router, prefix='/api/v1/categories', tags=['categories'])
app.include_router(products.router,   prefix='/api/v1/products',   tags=['products'])
