from kafka import KafkaProducer
import json
from storefront.catalog.core.config import settings
from storefront.common.logging import get_logger

logger = get_logger(__name__)

_producer = None

def get_producer() -> KafkaProducer:
    global _producer
    if _producer is None:
        _producer = KafkaProducer(
            bootstrap_servers=[settings.KAFKA_BOOTSTRAP],
            value_serializer=lambda v: json.dumps(v, default=str).encode("utf-8"),
            key_serializer=lambda v: (v.encode("utf-8") if isinstance(v, str) else v),
            acks="all",
            linger_ms=5,
            retries=3,
        )
    return _producer

def send(topic: str, key: str, value: dict):
    p = get_producer()
    p.send(topic, key=key, value=value)
    p.flush(5)

def publish_product_created(event: dict):
    """Publish a product.created event keyed by SKU.

    Errors propagate; the caller decides whether they are fatal.
    """
    logger.info("publishing_product_created", sku=event.get("sku"), topic=settings.TOPIC_PRODUCT_EVENTS)
    send(settings.TOPIC_PRODUCT_EVENTS, key=event["sku"], value=event)
    logger.info("published_product_created", sku=event.get("sku"), product_id=event.get("product_id"))
