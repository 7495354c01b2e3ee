from sqlalchemy import select
from sqlalchemy.orm import Session
from unievent.core.errors import Conflict
from unievent.crud.base import CRUDBase
from unievent.models.college import College
from unievent.schemas.college import CollegeCreate

class CRUDCollege(CRUDBase[College, CollegeCreate, CollegeCreate]):
    not_found_message = "College not found"

    def get_by_name(self, db: Session, name: str) -> College | None:
        return db.execute(select(College).where(College.name == name)).scalar_one_or_none()

    def create(self, db: Session, obj_in: CollegeCreate, extra=None) -> College:
        if self.get_by_name(db, obj_in.name.strip()):
            raise Conflict("College already exists")
        return super().create(db, CollegeCreate(name=obj_in.name.strip()), extra)

    def list_all(self, db: Session) -> list[College]:
        return list(db.execute(select(College).order_by(College.name)).scalars().all())

college_crud = CRUDCollege(College)
