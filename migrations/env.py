# migrations/env.py
from __future__ import annotations

from logging.config import fileConfig
import sys
from pathlib import Path

from alembic import context
from sqlalchemy import engine_from_config, pool

BASE_DIR = Path(__file__).resolve().parents[1]
if str(BASE_DIR) not in sys.path:
    sys.path.append(str(BASE_DIR))

from commerce.core.config import settings
from commerce.db.session import Base

# Import every model module so Base.metadata is complete.
from commerce.models import user      # noqa: F401  # User
from commerce.models import facet     # noqa: F401  # Facet, FacetValue, product_facet_values
from commerce.models import product   # noqa: F401  # Product, ProductVariant, UserProductVariant, ProductVariantPrice, ProductImage
from commerce.models import location  # noqa: F401  # Location
from commerce.models import coupon    # noqa: F401  # Coupon

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Alembic always runs on a sync driver.
alembic_url = settings.DATABASE_URL
if alembic_url.startswith("postgresql+asyncpg"):
    alembic_url = alembic_url.replace("+asyncpg", "+psycopg")

config.set_main_option("sqlalchemy.url", alembic_url)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """Run migrations without an Engine."""
    context.configure(
        url=alembic_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations against a live connection."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
