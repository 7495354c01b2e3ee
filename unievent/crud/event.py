import logging
from typing import Any, Dict, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from unievent.core.errors import NotFound, ValidationError
from unievent.crud.base import CRUDBase
from unievent.crud.registration import registration_crud
from unievent.models.admin import Admin
from unievent.models.event import Event, ALLOWED_TRANSITIONS
from unievent.models.feedback import Feedback
from unievent.models.registration import Registration, RegistrationStatus
from unievent.schemas.event import EventCreate, EventUpdate
from unievent.services.qr import new_event_secret

logger = logging.getLogger(__name__)

EVENT_FIELDS = (
    "id", "college_id", "title", "description", "event_date", "start_time", "end_time",
    "venue", "capacity", "category", "status", "created_by", "created_at",
)

def _count_by_status(status: RegistrationStatus):
    return (
        select(func.count(Registration.id))
        .where(Registration.event_id == Event.id, Registration.status == status.value)
        .correlate(Event)
        .scalar_subquery()
    )

def _row_to_dict(event: Event, **extra: Any) -> Dict[str, Any]:
    data = {k: getattr(event, k) for k in EVENT_FIELDS}
    data.update(extra)
    return data

class CRUDEvent(CRUDBase[Event, EventCreate, EventUpdate]):
    not_found_message = "Event not found"

    def create_for_admin(self, db: Session, obj_in: EventCreate, *, college_id: int, admin_id: int) -> Event:
        return self.create(db, obj_in, extra={
            "college_id": college_id,
            "created_by": admin_id,
            "qr_secret": new_event_secret(),
        })

    def _listing(self):
        return (
            select(
                Event,
                (Admin.first_name + " " + Admin.last_name).label("created_by_name"),
                _count_by_status(RegistrationStatus.registered).label("registered_count"),
                _count_by_status(RegistrationStatus.waitlisted).label("waitlist_count"),
            )
            .join(Admin, Admin.id == Event.created_by)
        )

    def list_events(
        self, db: Session, *, college_id: int, status: Optional[str] = None,
        category: Optional[str] = None, limit: int = 20, offset: int = 0,
    ) -> Dict[str, Any]:
        conds = [Event.college_id == college_id]
        if status:
            conds.append(Event.status == status)
        if category:
            conds.append(Event.category == category)

        stmt = self._listing().where(*conds).order_by(Event.event_date.asc(), Event.id.asc()).limit(limit).offset(offset)
        rows = db.execute(stmt).all()
        total = db.scalar(select(func.count(Event.id)).where(*conds)) or 0

        return {
            "events": [
                _row_to_dict(e, created_by_name=name, registered_count=reg or 0, waitlist_count=wait or 0)
                for e, name, reg, wait in rows
            ],
            "pagination": {
                "total": total,
                "limit": limit,
                "offset": offset,
                "has_more": total > offset + limit,
            },
        }

    def get_detail(self, db: Session, *, event_id: int, college_id: int, student_id: Optional[int] = None) -> Dict[str, Any]:
        avg_rating = (
            select(func.avg(Feedback.rating)).where(Feedback.event_id == Event.id).correlate(Event).scalar_subquery()
        )
        feedback_count = (
            select(func.count(Feedback.id)).where(Feedback.event_id == Event.id).correlate(Event).scalar_subquery()
        )
        stmt = (
            self._listing()
            .add_columns(avg_rating.label("avg_rating"), feedback_count.label("feedback_count"))
            .where(Event.id == event_id, Event.college_id == college_id)
        )
        row = db.execute(stmt).first()
        if not row:
            raise NotFound(self.not_found_message)
        e, name, reg, wait, avg, fb_count = row
        data = _row_to_dict(
            e,
            created_by_name=name,
            registered_count=reg or 0,
            waitlist_count=wait or 0,
            avg_rating=round(float(avg), 2) if avg is not None else None,
            feedback_count=fb_count or 0,
        )
        if student_id is not None:
            mine = db.execute(
                select(Registration.status, Registration.waitlist_position).where(
                    Registration.event_id == e.id, Registration.student_id == student_id
                )
            ).first()
            data["user_registration"] = (
                {"status": mine.status, "waitlist_position": mine.waitlist_position} if mine else None
            )
        return data

    def update_event(self, db: Session, event: Event, obj_in: EventUpdate) -> Event:
        """Partial update under the event row lock; a capacity raise promotes waitlist heads."""
        # same lock admit/cancel take, so seat counts cannot move underneath us
        db.refresh(event, with_for_update=True)
        data = obj_in.model_dump(exclude_unset=True)
        for required in ("title", "event_date", "venue", "capacity", "status"):
            if required in data and data[required] is None:
                raise ValidationError(f"{required} cannot be null")
        if not data:
            raise ValidationError("No valid fields to update")

        new_status = data.get("status")
        if new_status and new_status != event.status and new_status not in ALLOWED_TRANSITIONS[event.status]:
            raise ValidationError(f"Cannot move event from '{event.status}' to '{new_status}'")

        start = data.get("start_time", event.start_time)
        end = data.get("end_time", event.end_time)
        if start and end and start >= end:
            raise ValidationError("end_time must be later than start_time")

        for field, value in data.items():
            setattr(event, field, value)
        db.flush()
        promoted = []
        if "capacity" in data:
            promoted = registration_crud.fill_open_seats(db, event)
        db.commit()
        db.refresh(event)
        for reg in promoted:
            logger.info("Student %s promoted from waitlist for event %s", reg.student_id, event.id)
        return event

event_crud = CRUDEvent(Event)
