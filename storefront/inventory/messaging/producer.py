from kafka import KafkaProducer
import json
from storefront.inventory.core.config import settings

_producer = None

def get_producer() -> KafkaProducer:
    global _producer
    if _producer is None:
        _producer = KafkaProducer(
            bootstrap_servers=[settings.KAFKA_BOOTSTRAP],
            value_serializer=lambda v: json.dumps(v, default=str).encode("utf-8"),
            key_serializer=lambda v: (v.encode("utf-8") if isinstance(v, str) else v),
            acks="all",
        )
    return _producer

def send_dead_letter(key, value: dict):
    p = get_producer()
    p.send(settings.TOPIC_PRODUCT_EVENTS_DLQ, key=key, value=value)
    p.flush(5)
