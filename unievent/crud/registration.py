"""Capacity admission and the ordered waitlist.

Admission and cancellation both run as one transaction holding a row lock
on the event (``SELECT ... FOR UPDATE``), so concurrent requests for the same
event are serialized: the registered count never overshoots capacity and
waitlist positions stay a dense 1..N sequence in arrival order.
"""
import logging
from typing import List, Optional, Tuple

from sqlalchemy import select, func, update, case
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from unievent.core.errors import Conflict, NotFound, ValidationError
from unievent.crud.base import CRUDBase

from unievent.models.event import Event, TERMINAL_STATUSES
from unievent.models.registration import Registration, RegistrationStatus
from unievent.models.student import Student
from unievent.schemas.registration import RegistrationCreate

logger = logging.getLogger(__name__)

REGISTERED = RegistrationStatus.registered.value
WAITLISTED = RegistrationStatus.waitlisted.value
CANCELLED = RegistrationStatus.cancelled.value


class CRUDRegistration(CRUDBase[Registration, RegistrationCreate, RegistrationCreate]):
    not_found_message = "Registration not found"

    def _lock_event(self, db: Session, event_id: int, college_id: int) -> Event:
        event = db.execute(
            select(Event)
            .where(Event.id == event_id, Event.college_id == college_id)
            .with_for_update()
        ).scalar_one_or_none()
        if not event:
            raise NotFound("Event not found")
        return event

    def _count_registered(self, db: Session, event_id: int) -> int:
        return db.scalar(
            select(func.count(Registration.id)).where(
                Registration.event_id == event_id, Registration.status == REGISTERED
            )
        ) or 0

    def _next_position(self, db: Session, event_id: int) -> int:
        max_pos = db.scalar(
            select(func.max(Registration.waitlist_position)).where(
                Registration.event_id == event_id, Registration.status == WAITLISTED
            )
        )
        return (max_pos or 0) + 1

    def _close_gap(self, db: Session, event_id: int, freed_position: int) -> None:
        db.execute(
            update(Registration)
            .where(
                Registration.event_id == event_id,
                Registration.status == WAITLISTED,
                Registration.waitlist_position > freed_position,
            )
            .values(waitlist_position=Registration.waitlist_position - 1)
            .execution_options(synchronize_session="fetch")
        )

    def fill_open_seats(self, db: Session, event: Event) -> List[Registration]:
        """Promote waitlist heads, in position order, into any free seats.

        The caller holds the event row lock and commits. Promoting the first k
        positions of a dense 1..N waitlist leaves k+1..N, so the rest shift by k.
        """
        open_seats = event.capacity - self._count_registered(db, event.id)
        if open_seats <= 0:
            return []
        heads = list(
            db.execute(
                select(Registration)
                .where(Registration.event_id == event.id, Registration.status == WAITLISTED)
                .order_by(Registration.waitlist_position.asc())
                .limit(open_seats)
            ).scalars().all()
        )
        if not heads:
            return []
        for reg in heads:
            reg.status = REGISTERED
            reg.waitlist_position = None
        db.flush()
        db.execute(
            update(Registration)
            .where(Registration.event_id == event.id, Registration.status == WAITLISTED)
            .values(waitlist_position=Registration.waitlist_position - len(heads))
            .execution_options(synchronize_session="fetch")
        )
        return heads

    def admit(self, db: Session, *, event_id: int, student_id: int, college_id: int) -> Registration:
        """Registered while the event has room, otherwise waitlisted at the tail."""
        event = self._lock_event(db, event_id, college_id)
        if event.status in TERMINAL_STATUSES:
            raise ValidationError(f"Event is {event.status}; registration is closed")

        existing = db.execute(
            select(Registration).where(
                Registration.event_id == event_id, Registration.student_id == student_id
            )
        ).scalar_one_or_none()
        if existing and existing.status != CANCELLED:
            raise Conflict("Already registered for this event")

        if self._count_registered(db, event_id) < event.capacity:
            status, position = REGISTERED, None
        else:
            status, position = WAITLISTED, self._next_position(db, event_id)

        if existing:
            reg = existing
            reg.status = status
            reg.waitlist_position = position
        else:
            reg = Registration(
                event_id=event_id,
                student_id=student_id,
                college_id=college_id,
                status=status,
                waitlist_position=position,
            )
            db.add(reg)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise Conflict("Already registered for this event")
        db.refresh(reg)

        logger.info(
            "Student %s %s for event %s (position=%s)", student_id, status, event_id, position
        )
        return reg

    def cancel(
        self, db: Session, *, registration_id: int, student_id: int, college_id: int
    ) -> Tuple[Registration, Optional[Registration]]:
        """Cancel the student's own registration. Returns (cancelled, promoted-or-None)."""
        reg = db.execute(
            select(Registration).where(
                Registration.id == registration_id,
                Registration.student_id == student_id,
                Registration.college_id == college_id,
            )
        ).scalar_one_or_none()
        if not reg:
            raise NotFound(self.not_found_message)

        event = self._lock_event(db, reg.event_id, college_id)
        db.refresh(reg)
        if reg.status == CANCELLED:
            raise Conflict("Registration already cancelled")

        previous_status, previous_position = reg.status, reg.waitlist_position
        reg.status = CANCELLED
        reg.waitlist_position = None
        db.flush()

        promoted = None
        if previous_status == REGISTERED:
            heads = self.fill_open_seats(db, event)
            promoted = heads[0] if heads else None
        elif previous_position is not None:
            self._close_gap(db, event.id, previous_position)

        db.commit()
        db.refresh(reg)
        if promoted:
            db.refresh(promoted)
            logger.info("Student %s promoted from waitlist for event %s", promoted.student_id, event.id)
        logger.info("Registration %s cancelled (was %s)", reg.id, previous_status)
        return reg, promoted

    def list_mine(self, db: Session, *, student_id: int, college_id: int) -> list[dict]:
        rows = db.execute(
            select(Registration, Event.title, Event.event_date, Event.venue)
            .join(Event, Event.id == Registration.event_id)
            .where(Registration.student_id == student_id, Registration.college_id == college_id)
            .order_by(Event.event_date.asc(), Registration.id.asc())
        ).all()
        return [
            {
                "id": r.id,
                "event_id": r.event_id,
                "student_id": r.student_id,
                "status": r.status,
                "waitlist_position": r.waitlist_position,
                "created_at": r.created_at,
                "title": title,
                "event_date": event_date,
                "venue": venue,
            }
            for r, title, event_date, venue in rows
        ]

    def list_for_event(self, db: Session, *, event_id: int, college_id: int) -> list[dict]:
        found = db.scalar(select(Event.id).where(Event.id == event_id, Event.college_id == college_id))
        if found is None:
            raise NotFound("Event not found")
        status_order = case(
            (Registration.status == REGISTERED, 0),
            (Registration.status == WAITLISTED, 1),
            else_=2,
        )
        rows = db.execute(
            select(Registration, Student.first_name, Student.last_name, Student.student_id)
            .join(Student, Student.id == Registration.student_id)
            .where(Registration.event_id == event_id, Registration.college_id == college_id)
            .order_by(status_order, Registration.waitlist_position.asc(), Registration.id.asc())
        ).all()
        return [
            {
                "id": r.id,
                "event_id": r.event_id,
                "student_id": r.student_id,
                "status": r.status,
                "waitlist_position": r.waitlist_position,
                "created_at": r.created_at,
                "first_name": first,
                "last_name": last,
                "roll_number": roll,
            }
            for r, first, last, roll in rows
        ]

registration_crud = CRUDRegistration(Registration)
