# unievent/db/init_db.py
import logging
import os

from sqlalchemy import select
from sqlalchemy.orm import Session

from unievent.core.config import settings
from unievent.core.security import hash_password
from unievent.models.admin import Admin, AdminRole
from unievent.models.college import College

logger = logging.getLogger(__name__)

DEMO_COLLEGE = "Demo College"
DEMO_ADMIN_EMAIL = "admin@demo.example.com"

def init_db(db: Session) -> None:
    """Seed a demo college and its super admin; only when SEED_DEMO is on."""
    if not settings.SEED_DEMO:
        return

    college = db.scalar(select(College).where(College.name == DEMO_COLLEGE))
    if not college:
        college = College(name=DEMO_COLLEGE)
        db.add(college); db.flush()

    admin = db.scalar(select(Admin).where(Admin.email == DEMO_ADMIN_EMAIL))
    if not admin:
        db.add(Admin(
            college_id=college.id,
            email=DEMO_ADMIN_EMAIL,
            password_hash=hash_password(os.getenv("SEED_ADMIN_PASSWORD", "admin123")),
            first_name="Demo",
            last_name="Admin",
            role=AdminRole.super_admin.value,
        ))
        logger.info("Seeded demo super admin %s", DEMO_ADMIN_EMAIL)

    db.commit()
