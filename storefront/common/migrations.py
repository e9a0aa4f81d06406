"""Alembic environment shared by every service.

Each service's ``alembic/env.py`` passes its metadata and its own version
table, so the services can share one database without clashing.
"""
import os
from sqlalchemy import engine_from_config, pool
from alembic import context

def run_migrations_offline(target_metadata, version_table: str):
    context.configure(
        url=os.getenv("POSTGRES_DSN"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        version_table=version_table,
        compare_type=True
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online(target_metadata, version_table: str):
    connectable = engine_from_config(
        {"sqlalchemy.url": os.getenv("POSTGRES_DSN")},
        prefix="sqlalchemy.",
        poolclass=pool.NullPool
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            version_table=version_table,
            compare_type=True
        )
        with context.begin_transaction():
            context.run_migrations()

def run_migrations(target_metadata, version_table: str):
    if context.is_offline_mode():
        run_migrations_offline(target_metadata, version_table)
    else:
        run_migrations_online(target_metadata, version_table)
