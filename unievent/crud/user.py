import logging
from typing import Union

from sqlalchemy import select
from sqlalchemy.orm import Session

from unievent.core.errors import Conflict, Forbidden, NotFound, Unauthenticated
from unievent.core.security import hash_password, normalize_email, verify_and_maybe_upgrade
from unievent.crud.college import college_crud
from unievent.models.admin import Admin, AdminRole
from unievent.models.student import Student
from unievent.schemas.auth import AdminRegister, StudentRegister

logger = logging.getLogger(__name__)

Account = Union[Admin, Student]


def account_role(account: Account) -> str:
    return account.role if isinstance(account, Admin) else "student"


class CRUDAccount:
    """Admins and students live in separate tables but share one email namespace."""

    def get_by_email(self, db: Session, email: str) -> Account | None:
        email = normalize_email(email)
        admin = db.execute(select(Admin).where(Admin.email == email)).scalar_one_or_none()
        if admin:
            return admin
        return db.execute(select(Student).where(Student.email == email)).scalar_one_or_none()

    def _ensure_registrable(self, db: Session, email: str, college_id: int) -> None:
        if not college_crud.get(db, college_id):
            raise NotFound("College not found")
        if self.get_by_email(db, email):
            raise Conflict("Email already registered")

    def create_student(self, db: Session, obj_in: StudentRegister) -> Student:
        email = normalize_email(obj_in.email)
        self._ensure_registrable(db, email, obj_in.college_id)
        student = Student(
            college_id=obj_in.college_id,
            student_id=obj_in.student_id.strip(),
            email=email,
            password_hash=hash_password(obj_in.password),
            first_name=obj_in.first_name.strip(),
            last_name=obj_in.last_name.strip(),
            department=obj_in.department,
            year_of_study=obj_in.year_of_study,
        )
        db.add(student); db.commit(); db.refresh(student)
        logger.info("Student %s registered in college %s", student.id, student.college_id)
        return student

    def create_admin(self, db: Session, obj_in: AdminRegister, role: AdminRole = AdminRole.admin) -> Admin:
        email = normalize_email(obj_in.email)
        self._ensure_registrable(db, email, obj_in.college_id)
        admin = Admin(
            college_id=obj_in.college_id,
            email=email,
            password_hash=hash_password(obj_in.password),
            first_name=obj_in.first_name.strip(),
            last_name=obj_in.last_name.strip(),
            role=role.value,
        )
        db.add(admin); db.commit(); db.refresh(admin)
        logger.info("Admin %s (%s) registered in college %s", admin.id, admin.role, admin.college_id)
        return admin

    def authenticate(self, db: Session, email: str, password: str) -> Account:
        account = self.get_by_email(db, email)
        if not account:
            raise Unauthenticated("Invalid credentials")
        ok, new_hash = verify_and_maybe_upgrade(password, account.password_hash)
        if not ok:
            logger.warning("Failed login for account %s (%s)", account.id, account_role(account))
            raise Unauthenticated("Invalid credentials")
        if not account.is_active:
            raise Forbidden("Account is inactive")
        if new_hash:
            account.password_hash = new_hash
            db.add(account); db.commit()
        return account

    def get_live(self, db: Session, *, user_id: int, role: str) -> Account | None:
        """Current row for a credential subject, chosen by the table its role lives in."""
        model = Student if role == "student" else Admin
        return db.get(model, user_id)

account_crud = CRUDAccount()
