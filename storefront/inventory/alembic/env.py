from storefront.inventory.db.session import Base
import storefront.inventory.db.models  # noqa
from storefront.common.migrations import run_migrations

run_migrations(Base.metadata, "alembic_version_inventory")
