import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from unievent.core.errors import AlreadyCheckedIn, InvalidProof, ValidationError
from unievent.crud.base import CRUDBase
from unievent.crud.event import event_crud
from unievent.models.attendance import Attendance, AttendanceOrigin
from unievent.models.event import Event
from unievent.models.registration import Registration, RegistrationStatus
from unievent.models.student import Student
from unievent.services.qr import names_storable_event, parse_qr_data, proof_matches

logger = logging.getLogger(__name__)

class CRUDAttendance(CRUDBase[Attendance, None, None]):
    def _ensure_absent(self, db: Session, *, event_id: int, student_id: int) -> None:
        att = db.execute(
            select(Attendance.id).where(
                Attendance.event_id == event_id,
                Attendance.student_id == student_id,
            )
        ).scalar_one_or_none()
        if att:
            raise AlreadyCheckedIn()

    def _record(self, db: Session, *, event_id: int, student_id: int, college_id: int, origin: AttendanceOrigin) -> Attendance:
        att = Attendance(event_id=event_id, student_id=student_id, college_id=college_id, origin=origin.value)
        db.add(att)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise AlreadyCheckedIn()
        db.refresh(att)
        logger.info("Attendance recorded: event=%s student=%s origin=%s", event_id, student_id, origin.value)
        return att

    def mark_manual(self, db: Session, *, event_id: int, student_id: int, college_id: int) -> Attendance:
        event_crud.get_in_college(db, event_id, college_id)
        reg = db.execute(
            select(Registration.id).where(
                Registration.event_id == event_id,
                Registration.student_id == student_id,
                Registration.college_id == college_id,
                Registration.status == RegistrationStatus.registered.value,
            )
        ).scalar_one_or_none()
        if not reg:
            raise ValidationError("Student not registered for event")
        self._ensure_absent(db, event_id=event_id, student_id=student_id)
        return self._record(db, event_id=event_id, student_id=student_id, college_id=college_id, origin=AttendanceOrigin.manual)

    def qr_checkin(self, db: Session, *, qr_data: str, student_id: int, college_id: int) -> Attendance:
        payload = parse_qr_data(qr_data)
        event = None
        if payload.college_id == college_id and names_storable_event(payload):
            event = db.execute(
                select(Event).where(Event.id == payload.event_id, Event.college_id == college_id)
            ).scalar_one_or_none()
        if not proof_matches(event, payload):
            logger.warning("Rejected QR proof from student %s for event %s", student_id, payload.event_id)
            raise InvalidProof()
        self._ensure_absent(db, event_id=event.id, student_id=student_id)
        return self._record(db, event_id=event.id, student_id=student_id, college_id=college_id, origin=AttendanceOrigin.qr)

    def list_for_event(self, db: Session, *, event_id: int, college_id: int) -> list[dict]:
        event_crud.get_in_college(db, event_id, college_id)
        rows = db.execute(
            select(Attendance, Student.first_name, Student.last_name, Student.student_id)
            .join(Student, Student.id == Attendance.student_id)
            .where(Attendance.event_id == event_id, Attendance.college_id == college_id)
            .order_by(Attendance.checked_in_at.asc(), Attendance.id.asc())
        ).all()
        return [
            {
                "id": a.id,
                "student_id": a.student_id,
                "first_name": first,
                "last_name": last,
                "roll_number": roll,
                "origin": a.origin,
                "checked_in_at": a.checked_in_at,
            }
            for a, first, last, roll in rows
        ]

attendance_crud = CRUDAttendance(Attendance)
