"""Consumes product.created events and provisions inventory rows.

Offsets are committed by hand once a batch has either been applied or
forwarded to the dead-letter topic, so a crash mid-handler replays it.
Redelivery is harmless: a SKU that already has inventory is skipped.
"""
import threading, json
from kafka import KafkaConsumer
from sqlalchemy.orm import Session
from storefront.inventory.core.config import settings
from storefront.inventory.db.session import SessionLocal
from storefront.inventory.messaging import producer
from storefront.inventory.services import inventory as service
from storefront.common.logging import get_logger

logger = get_logger(__name__)

PRODUCT_CREATED = "product.created"
RETRY_DELAY_SECONDS = 1.0

_stop_event = threading.Event()
_thread = None

def handle_product_created(ev: dict, db: Session):
    sku = ev.get("sku")
    logger.info("product_created_received", sku=sku, product_id=ev.get("product_id"))
    try:
        if service.inventory_exists(db, sku):
            logger.info("inventory_already_provisioned", sku=sku)
            return
        service.create_inventory_for_product(db, sku, ev.get("initial_quantity") or 0)
    except Exception:
        logger.exception("product_created_failed", sku=sku)
        raise

def dispatch(ev: dict, db: Session):
    """Apply one event.

    Returns True when applied or ignored, False when it was sent to the
    dead-letter topic, and None when neither worked and it must be redelivered.
    """
    if not isinstance(ev, dict) or ev.get("type", PRODUCT_CREATED) != PRODUCT_CREATED:
        logger.debug("event_ignored", event_type=(ev or {}).get("type") if isinstance(ev, dict) else None)
        return True
    try:
        handle_product_created(ev, db)
        return True
    except Exception as e:
        db.rollback()
        error = str(e)
    try:
        producer.send_dead_letter(ev.get("sku"), {"event": ev, "error": error})
    except Exception:
        logger.exception("dead_letter_failed", sku=ev.get("sku"), topic=settings.TOPIC_PRODUCT_EVENTS_DLQ)
        return None
    logger.warning("event_dead_lettered", sku=ev.get("sku"), topic=settings.TOPIC_PRODUCT_EVENTS_DLQ)
    return False

def _deserialize(v: bytes):
    try:
        return json.loads(v.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        logger.warning("undecodable_event", raw=v[:200])
        return None

def process_batch(consumer: KafkaConsumer, batches: dict, db: Session) -> bool:
    """Dispatch a poll result. On a message that must be redelivered, rewind
    its partition to it and skip the rest of that partition. Returns False
    when any partition was rewound."""
    clean = True
    for tp, messages in batches.items():
        for msg in messages:
            if msg.value is None:
                continue
            if dispatch(msg.value, db) is None:
                consumer.seek(tp, msg.offset)
                clean = False
                break
    return clean

def run_loop():
    consumer = KafkaConsumer(
        settings.TOPIC_PRODUCT_EVENTS,
        bootstrap_servers=[settings.KAFKA_BOOTSTRAP],
        group_id=settings.KAFKA_GROUP_ID,
        value_deserializer=_deserialize,
        enable_auto_commit=False,
        auto_offset_reset="earliest",
    )
    logger.info("consumer_started", topic=settings.TOPIC_PRODUCT_EVENTS, group_id=settings.KAFKA_GROUP_ID)
    db = SessionLocal()
    try:
        while not _stop_event.is_set():
            batches = consumer.poll(timeout_ms=1000)
            if not batches:
                continue
            if process_batch(consumer, batches, db):
                consumer.commit()
            else:
                _stop_event.wait(RETRY_DELAY_SECONDS)
    finally:
        db.close()
        consumer.close()
        logger.info("consumer_stopped")

def start():
    global _thread
    if _thread and _thread.is_alive(): return
    _stop_event.clear()
    _thread = threading.Thread(target=run_loop, daemon=True)
    _thread.start()

def stop():
    _stop_event.set()
