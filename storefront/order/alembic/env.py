from storefront.order.db.session import Base
import storefront.order.db.models  # noqa
from storefront.common.migrations import run_migrations

run_migrations(Base.metadata, "alembic_version_order")
