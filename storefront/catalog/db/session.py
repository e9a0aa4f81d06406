from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from storefront.catalog.core.config import settings

def make_engine(dsn: str):
    if dsn.startswith('sqlite'):
        return create_engine(dsn, connect_args={'check_same_thread': False}, poolclass=StaticPool)
    return create_engine(dsn, pool_pre_ping=True)

class Base(DeclarativeBase): pass
engine = make_engine(settings.POSTGRES_DSN)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
