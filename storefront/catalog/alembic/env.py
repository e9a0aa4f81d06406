from storefront.catalog.db.session import Base
import storefront.catalog.db.models  # noqa
from storefront.common.migrations import run_migrations

run_migrations(Base.metadata, "alembic_version_catalog")
