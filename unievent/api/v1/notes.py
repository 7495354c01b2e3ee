# unievent/api/v1/notes.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from unievent.api.permissions import require_student
from unievent.crud.note import note_crud
from unievent.db.session import get_db
from unievent.schemas.note import Note, NoteUpsert

router = APIRouter()

@router.post("")
def upsert_note(body: NoteUpsert, db: Session = Depends(get_db), student=Depends(require_student)):
    note, created = note_crud.upsert(db, body, student_id=student.id, college_id=student.college_id)
    verb = "created" if created else "updated"
    return {"message": f"Note {verb} successfully", "note": Note.model_validate(note)}

@router.get("/event/{event_id}", response_model=Optional[Note])
def get_note(event_id: int, db: Session = Depends(get_db), student=Depends(require_student)):
    return note_crud.get_own(db, event_id=event_id, student_id=student.id, college_id=student.college_id)
