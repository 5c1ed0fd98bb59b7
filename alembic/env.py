"""
============================================================
TARJETA CRC — alembic/env.py
============================================================
Responsabilidades:
  - Correr las migraciones del esquema de albaranes (online y offline).
  - Tomar la URL de Settings.database_url (DATABASE_URL) y forzar el
    driver psycopg 3, el mismo que usa el pool de la API.

Colaboradores:
  - albaranes.crosscutting.config.get_settings
  - alembic/versions/* (SQL explícito: índices parciales, CHECKs)

Política:
  - Sin metadata ORM: autogenerate deshabilitado.
============================================================
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool, text

from albaranes.crosscutting.config import get_settings

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

_DRIVER_PREFIXES = ("postgresql://", "postgres://")


def database_url() -> str:
    url = get_settings().database_url
    for prefix in _DRIVER_PREFIXES:
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def run_migrations_offline() -> None:
    """Emite el SQL por stdout (`alembic upgrade head --sql`)."""
    context.configure(
        url=database_url(),
        target_metadata=None,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    engine = create_engine(database_url(), poolclass=pool.NullPool)
    with engine.connect() as connection:
        # Los DEFAULT now() de created_at/deleted_at quedan en UTC.
        connection.execute(text("SET TIME ZONE 'UTC'"))
        context.configure(connection=connection, target_metadata=None)
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
