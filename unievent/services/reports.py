"""Read-only, tenant-scoped aggregation reports for college admins."""
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, select, func, or_
from sqlalchemy.orm import Session

from unievent.models.attendance import Attendance
from unievent.models.certificate import Certificate
from unievent.models.event import Event, EventStatus
from unievent.models.feedback import Feedback
from unievent.models.registration import Registration, RegistrationStatus
from unievent.models.student import Student

REGISTERED = RegistrationStatus.registered.value


def _nulls_last_desc(rows: List[Dict[str, Any]], key: str) -> List[Dict[str, Any]]:
    # stable sort keeps event id order among ties
    return sorted(rows, key=lambda r: (r[key] is None, -(r[key] or 0)))


def event_popularity(db: Session, *, college_id: int) -> List[Dict[str, Any]]:
    registrations = func.count(Registration.id)
    rows = db.execute(
        select(Event.id, Event.title, registrations.label("registrations"))
        .outerjoin(Registration, and_(Registration.event_id == Event.id, Registration.status == REGISTERED))
        .where(Event.college_id == college_id)
        .group_by(Event.id, Event.title)
        .order_by(registrations.desc(), Event.id.asc())
    ).all()
    return [{"id": r.id, "title": r.title, "registrations": r.registrations} for r in rows]


def _attendance_counts(college_id: int, *, start_date=None, end_date=None, event_type=None):
    stmt = (
        select(Attendance.student_id, func.count(Attendance.id).label("events_attended"))
        .join(Event, Event.id == Attendance.event_id)
        .where(Attendance.college_id == college_id)
    )
    if start_date is not None:
        stmt = stmt.where(Attendance.checked_in_at >= start_date)
    if end_date is not None:
        stmt = stmt.where(Attendance.checked_in_at <= end_date)
    if event_type:
        stmt = stmt.where(Event.category == event_type)
    return stmt.group_by(Attendance.student_id).subquery()


def _student_rows(db: Session, college_id: int, att, *, inner: bool = False, limit: Optional[int] = None):
    attended = func.coalesce(att.c.events_attended, 0)
    stmt = select(
        Student.id, Student.first_name, Student.last_name,
        Student.student_id.label("roll_number"), attended.label("events_attended"),
    )
    stmt = stmt.join(att, att.c.student_id == Student.id) if inner else stmt.outerjoin(att, att.c.student_id == Student.id)
    stmt = stmt.where(Student.college_id == college_id).order_by(attended.desc(), Student.id.asc())
    if limit is not None:
        stmt = stmt.limit(limit)
    return [
        {
            "id": r.id,
            "first_name": r.first_name,
            "last_name": r.last_name,
            "roll_number": r.roll_number,
            "events_attended": r.events_attended,
        }
        for r in db.execute(stmt).all()
    ]


def student_participation(
    db: Session, *, college_id: int,
    start_date: Optional[dt.datetime] = None,
    end_date: Optional[dt.datetime] = None,
    event_type: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Attended-event count per student; filters narrow what counts, not who is listed."""
    att = _attendance_counts(college_id, start_date=start_date, end_date=end_date, event_type=event_type)
    return _student_rows(db, college_id, att)


def leaderboard(db: Session, *, college_id: int, limit: int = 10) -> List[Dict[str, Any]]:
    return _student_rows(db, college_id, _attendance_counts(college_id), limit=limit)


def top_students(db: Session, *, college_id: int, limit: int = 3) -> List[Dict[str, Any]]:
    return _student_rows(db, college_id, _attendance_counts(college_id), inner=True, limit=limit)


def attendance_percentage(db: Session, *, college_id: int) -> List[Dict[str, Any]]:
    reg = (
        select(Registration.event_id, func.count(Registration.id).label("registered_count"))
        .where(Registration.status == REGISTERED, Registration.college_id == college_id)
        .group_by(Registration.event_id)
        .subquery()
    )
    att = (
        select(Attendance.event_id, func.count(Attendance.id).label("attended_count"))
        .where(Attendance.college_id == college_id)
        .group_by(Attendance.event_id)
        .subquery()
    )
    rows = db.execute(
        select(
            Event.id, Event.title,
            func.coalesce(reg.c.registered_count, 0).label("registered_count"),
            func.coalesce(att.c.attended_count, 0).label("attended_count"),
        )
        .outerjoin(reg, reg.c.event_id == Event.id)
        .outerjoin(att, att.c.event_id == Event.id)
        .where(Event.college_id == college_id)
        .order_by(Event.id.asc())
    ).all()

    report = []
    for r in rows:
        # undefined without registrations; reported as null instead of dividing by zero
        pct = round(r.attended_count / r.registered_count * 100, 2) if r.registered_count else None
        report.append({
            "id": r.id,
            "title": r.title,
            "registered_count": r.registered_count,
            "attended_count": r.attended_count,
            "attendance_percentage": pct,
        })
    return _nulls_last_desc(report, "attendance_percentage")


def average_feedback(db: Session, *, college_id: int) -> List[Dict[str, Any]]:
    rows = db.execute(
        select(
            Event.id, Event.title,
            func.avg(Feedback.rating).label("average_rating"),
            func.count(Feedback.id).label("feedback_count"),
        )
        .outerjoin(Feedback, Feedback.event_id == Event.id)
        .where(Event.college_id == college_id)
        .group_by(Event.id, Event.title)
        .order_by(Event.id.asc())
    ).all()
    report = [
        {
            "id": r.id,
            "title": r.title,
            "average_rating": round(float(r.average_rating), 2) if r.average_rating is not None else None,
            "feedback_count": r.feedback_count,
        }
        for r in rows
    ]
    return _nulls_last_desc(report, "average_rating")


def college_stats(db: Session, *, college_id: int) -> Dict[str, int]:
    def count(stmt) -> int:
        return db.scalar(stmt) or 0

    return {
        "total_events": count(select(func.count(Event.id)).where(Event.college_id == college_id)),
        "active_events": count(
            select(func.count(Event.id)).where(Event.college_id == college_id, Event.status == EventStatus.active.value)
        ),
        "total_students": count(
            select(func.count(Student.id)).where(Student.college_id == college_id, Student.is_active.is_(True))
        ),
        "total_registrations": count(select(func.count(Registration.id)).where(Registration.college_id == college_id)),
        "total_attendance": count(select(func.count(Attendance.id)).where(Attendance.college_id == college_id)),
        "total_certificates": count(select(func.count(Certificate.id)).where(Certificate.college_id == college_id)),
    }


def list_students(
    db: Session, *, college_id: int, search: Optional[str] = None,
    year_of_study: Optional[int] = None, department: Optional[str] = None,
    limit: int = 50, offset: int = 0,
) -> List[Dict[str, Any]]:
    stmt = select(Student).where(Student.college_id == college_id, Student.is_active.is_(True))
    if search:
        like = f"%{search.strip()}%"
        stmt = stmt.where(or_(
            Student.first_name.ilike(like),
            Student.last_name.ilike(like),
            Student.email.ilike(like),
            Student.student_id.ilike(like),
        ))
    if year_of_study is not None:
        stmt = stmt.where(Student.year_of_study == year_of_study)
    if department:
        stmt = stmt.where(Student.department == department)
    stmt = stmt.order_by(Student.first_name, Student.last_name, Student.id).limit(limit).offset(offset)
    return [
        {
            "id": s.id,
            "student_id": s.student_id,
            "email": s.email,
            "first_name": s.first_name,
            "last_name": s.last_name,
            "department": s.department,
            "year_of_study": s.year_of_study,
            "created_at": s.created_at,
        }
        for s in db.execute(stmt).scalars().all()
    ]
