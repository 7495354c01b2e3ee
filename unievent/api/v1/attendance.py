# unievent/api/v1/attendance.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from unievent.api.permissions import require_admin, require_student
from unievent.crud.attendance import attendance_crud
from unievent.db.session import get_db
from unievent.schemas.attendance import EventAttendance, ManualAttendanceIn, QrCheckinIn

router = APIRouter()

# POST /attendance/manual  (admin marca presença de aluno inscrito)
@router.post("/manual")
def mark_manual(body: ManualAttendanceIn, db: Session = Depends(get_db), admin=Depends(require_admin)):
    att = attendance_crud.mark_manual(
        db, event_id=body.event_id, student_id=body.student_id, college_id=admin.college_id
    )
    return {"message": "Attendance marked successfully", "attendance_id": att.id}

# POST /attendance/qr-checkin  (aluno lê o QR do evento)
@router.post("/qr-checkin")
def qr_checkin(body: QrCheckinIn, db: Session = Depends(get_db), student=Depends(require_student)):
    att = attendance_crud.qr_checkin(db, qr_data=body.qr_data, student_id=student.id, college_id=student.college_id)
    return {"message": "Checked in successfully", "attendance_id": att.id, "event_id": att.event_id}

@router.get("/event/{event_id}", response_model=EventAttendance)
def event_attendance(event_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return {"attendance": attendance_crud.list_for_event(db, event_id=event_id, college_id=admin.college_id)}
