# unievent/services/certificates.py
from __future__ import annotations

import logging
import uuid
from typing import Any, Dict

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from unievent.core.errors import ValidationError
from unievent.crud.event import event_crud
from unievent.models.attendance import Attendance
from unievent.models.certificate import Certificate
from unievent.models.student import Student

logger = logging.getLogger(__name__)

def issue_bulk(db: Session, *, event_id: int, college_id: int) -> Dict[str, Any]:
    """One certificate record per attendee still without one.

    Every attendee is committed on its own, so one failure lands in the
    ``failed`` list without undoing the others.
    """
    event_crud.get_in_college(db, event_id, college_id)

    attendees = db.execute(
        select(Attendance.id, Attendance.student_id, Student.first_name, Student.last_name)
        .join(Student, Student.id == Attendance.student_id)
        .outerjoin(
            Certificate,
            and_(Certificate.event_id == Attendance.event_id, Certificate.student_id == Attendance.student_id),
        )
        .where(
            Attendance.event_id == event_id,
            Attendance.college_id == college_id,
            Certificate.id.is_(None),
        )
        .order_by(Attendance.id)
    ).all()
    if not attendees:
        raise ValidationError("No attendees found or all certificates already generated")

    generated, failed = [], []
    for att in attendees:
        name = f"{att.first_name} {att.last_name}"
        code = uuid.uuid4().hex
        db.add(Certificate(
            college_id=college_id,
            event_id=event_id,
            student_id=att.student_id,
            attendance_id=att.id,
            certificate_id=code,
        ))
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Certificate for student %s on event %s failed", att.student_id, event_id)
            failed.append({"student_id": att.student_id, "student_name": name, "error": "Could not issue certificate"})
            continue
        generated.append({"student_id": att.student_id, "student_name": name, "certificate_id": code})

    logger.info("Bulk certificates for event %s: %s generated, %s failed", event_id, len(generated), len(failed))
    return {
        "message": "Bulk certificate generation completed",
        "generated": len(generated),
        "failed": len(failed),
        "details": {"generated": generated, "failed": failed},
    }
