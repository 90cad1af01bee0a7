"""
Migration environment for the garbage tracker schema.

The database URL always comes from ``settings.DATABASE_URL`` (env or .env);
alembic.ini does not carry one. SQLite runs in batch mode because it cannot
ALTER most column properties in place.
"""
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from config.settings import settings
from config.database import Base, build_engine
import api.garbage_reports.garbage_reports_model  # noqa: F401
import api.admin.admin_model  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _context_options(url: str) -> dict:
    return {
        "target_metadata": target_metadata,
        "compare_type": True,
        "render_as_batch": url.startswith("sqlite"),
    }


def run_migrations_offline(url: str) -> None:
    """Emit SQL to stdout without connecting."""
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_context_options(url),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online(url: str) -> None:
    # no pooling for a one-shot run; SQLite reuses the app engine setup
    if url.startswith("sqlite"):
        engine = build_engine(url)
    else:
        engine = create_engine(url, poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_context_options(url))
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline(settings.DATABASE_URL)
else:
    run_migrations_online(settings.DATABASE_URL)
