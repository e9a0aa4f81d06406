from fastapi import FastAPI
from prometheus_fastapi_instrumentator import Instrumentator
from storefront.version import VERSION
from storefront.order.api import cart, orders, payment
from storefront.common.errors import register_exception_handlers
from storefront.common.health import health_router
from storefront.common.logging import configure_logging

configure_logging('order')

instrumentator = Instrumentator()

app = FastAPI(title='Order Service', version=VERSION)

instrumentator.instrument(app).expose(
    app,
    include_in_schema=False,
    endpoint="/order/metrics",
    should_gzip=True,
)

register_exception_handlers(app)

app.include_router(health_router('order', 'Order Service', '/api/v1/order/health', '/api/v1/cart/health'))
app.include_router(cart.router,    prefix='/api/v1/cart',    tags=['cart'])
app.include_router(orders.router,  prefix='/api/v1/order',   tags=['order'])
app.include_router(payment.router, prefix='/api/v1/payment', tags=['payment'])
