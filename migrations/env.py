# migrations/env.py
from alembic import context
from sqlalchemy import engine_from_config, pool

from unievent.core.config import settings
from unievent.db.base import Base
import unievent.models  # noqa: F401  (registra todos os models no metadata)

config = context.config

# Alembic usa a mesma URL da aplicação (DATABASE_URL / DB_* / sqlite fallback)
config.set_main_option("sqlalchemy.url", settings.DATABASE_URL.replace("%", "%%"))

target_metadata = Base.metadata

def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite")

def run_migrations_offline():
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        render_as_batch=_is_sqlite(url),
    )
    with context.begin_transaction():
        context.run_migrations()

def run_migrations_online():
    connectable = engine_from_config(config.get_section(config.config_ini_section), prefix="sqlalchemy.", poolclass=pool.NullPool)
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()

if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
