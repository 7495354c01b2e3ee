# unievent/db/bootstrap.py
import logging
import os
from alembic import command
from alembic.config import Config

from unievent.db.session import SessionLocal
from unievent.db.init_db import init_db

logger = logging.getLogger(__name__)

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))

def alembic_config() -> Config:
    # Aponta explicitamente para alembic.ini e migrations/
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "migrations"))
    return cfg

def run_migrations_and_seed() -> None:
    command.upgrade(alembic_config(), "head")
    logger.info("Database migrated to head")

    with SessionLocal() as db:
        init_db(db)
