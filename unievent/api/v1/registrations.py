# unievent/api/v1/registrations.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from unievent.api.permissions import require_admin, require_student
from unievent.crud.registration import registration_crud
from unievent.db.session import get_db
from unievent.schemas.registration import (
    AdmissionOut, EventRegistrations, MyRegistrations, Registration, RegistrationCreate,
)

router = APIRouter()

@router.post("", response_model=AdmissionOut)
def register(body: RegistrationCreate, db: Session = Depends(get_db), student=Depends(require_student)):
    reg = registration_crud.admit(db, event_id=body.event_id, student_id=student.id, college_id=student.college_id)
    return AdmissionOut(
        message=f"Registration {reg.status}",
        registration_id=reg.id,
        status=reg.status,
        waitlist_position=reg.waitlist_position,
    )

@router.get("/my", response_model=MyRegistrations)
def my_registrations(db: Session = Depends(get_db), student=Depends(require_student)):
    return {"registrations": registration_crud.list_mine(db, student_id=student.id, college_id=student.college_id)}

@router.post("/{registration_id}/cancel")
def cancel_registration(registration_id: int, db: Session = Depends(get_db), student=Depends(require_student)):
    reg, promoted = registration_crud.cancel(
        db, registration_id=registration_id, student_id=student.id, college_id=student.college_id
    )
    return {
        "message": "Registration cancelled",
        "registration": Registration.model_validate(reg),
        "promoted_registration_id": promoted.id if promoted else None,
    }

@router.get("/event/{event_id}", response_model=EventRegistrations)
def event_registrations(event_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return {"registrations": registration_crud.list_for_event(db, event_id=event_id, college_id=admin.college_id)}
