from typing import Optional, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from unievent.core.errors import ValidationError
from unievent.crud.base import CRUDBase
from unievent.models.note import Note
from unievent.models.registration import Registration, RegistrationStatus
from unievent.schemas.note import NoteUpsert

class CRUDNote(CRUDBase[Note, NoteUpsert, NoteUpsert]):
    def get_own(self, db: Session, *, event_id: int, student_id: int, college_id: int) -> Optional[Note]:
        return db.execute(
            select(Note).where(
                Note.event_id == event_id,
                Note.student_id == student_id,
                Note.college_id == college_id,
            )
        ).scalar_one_or_none()

    def upsert(self, db: Session, obj_in: NoteUpsert, *, student_id: int, college_id: int) -> Tuple[Note, bool]:
        """Create-if-absent, else update in place. Returns (note, created)."""
        registered = db.execute(
            select(Registration.id).where(
                Registration.event_id == obj_in.event_id,
                Registration.student_id == student_id,
                Registration.college_id == college_id,
                Registration.status != RegistrationStatus.cancelled.value,
            )
        ).scalar_one_or_none()
        if not registered:
            raise ValidationError("Can only create notes for events you are registered for")

        note = self.get_own(db, event_id=obj_in.event_id, student_id=student_id, college_id=college_id)
        if note:
            return self.update(db, note, {"content": obj_in.content}), False
        return self.create(db, obj_in, extra={"student_id": student_id, "college_id": college_id}), True

note_crud = CRUDNote(Note)
