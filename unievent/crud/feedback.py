import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from unievent.core.errors import Conflict, NotFound, ValidationError
from unievent.crud.base import CRUDBase
from unievent.crud.event import event_crud
from unievent.models.attendance import Attendance
from unievent.models.event import Event
from unievent.models.feedback import Feedback
from unievent.models.student import Student
from unievent.schemas.feedback import FeedbackCreate, FeedbackUpdate

logger = logging.getLogger(__name__)

class CRUDFeedback(CRUDBase[Feedback, FeedbackCreate, FeedbackUpdate]):
    not_found_message = "Feedback not found"

    def submit(self, db: Session, obj_in: FeedbackCreate, *, student_id: int, college_id: int) -> Feedback:
        attended = db.execute(
            select(Attendance.id).where(
                Attendance.event_id == obj_in.event_id,
                Attendance.student_id == student_id,
                Attendance.college_id == college_id,
            )
        ).scalar_one_or_none()
        if not attended:
            raise ValidationError("Can only provide feedback for events you attended")

        existing = db.execute(
            select(Feedback.id).where(Feedback.event_id == obj_in.event_id, Feedback.student_id == student_id)
        ).scalar_one_or_none()
        if existing:
            raise Conflict("Feedback already submitted for this event")

        try:
            fb = self.create(db, obj_in, extra={"student_id": student_id, "college_id": college_id})
        except IntegrityError:
            db.rollback()
            raise Conflict("Feedback already submitted for this event")
        logger.info("Feedback %s submitted for event %s (rating=%s)", fb.id, fb.event_id, fb.rating)
        return fb

    def update_own(self, db: Session, feedback_id: int, obj_in: FeedbackUpdate, *, student_id: int, college_id: int) -> Feedback:
        fb = db.execute(
            select(Feedback).where(
                Feedback.id == feedback_id,
                Feedback.student_id == student_id,
                Feedback.college_id == college_id,
            )
        ).scalar_one_or_none()
        if not fb:
            raise NotFound(self.not_found_message)

        data = obj_in.model_dump(exclude_unset=True)
        if not data:
            raise ValidationError("No valid fields to update")
        for required in ("rating", "anonymous"):
            if required in data and data[required] is None:
                raise ValidationError(f"{required} cannot be null")
        return self.update(db, fb, data)

    def for_event(self, db: Session, *, event_id: int, college_id: int) -> dict:
        event_crud.get_in_college(db, event_id, college_id)
        rows = db.execute(
            select(Feedback, Student.first_name, Student.last_name, Student.student_id)
            .join(Student, Student.id == Feedback.student_id)
            .where(Feedback.event_id == event_id, Feedback.college_id == college_id)
            .order_by(Feedback.submitted_at.desc(), Feedback.id.desc())
        ).all()

        feedback = []
        for f, first, last, roll in rows:
            feedback.append({
                "id": f.id,
                "event_id": f.event_id,
                "rating": f.rating,
                "comments": f.comments,
                "suggestions": f.suggestions,
                "anonymous": f.anonymous,
                "submitted_at": f.submitted_at,
                "student_name": "Anonymous" if f.anonymous else f"{first} {last}",
                "roll_number": None if f.anonymous else roll,
            })

        ratings = [f["rating"] for f in feedback]
        summary = {
            "total_feedback": len(ratings),
            "average_rating": round(sum(ratings) / len(ratings), 2) if ratings else 0,
            "rating_distribution": {star: ratings.count(star) for star in range(1, 6)},
        }
        return {"feedback": feedback, "summary": summary}

    def mine(self, db: Session, *, student_id: int, college_id: int) -> list[dict]:
        rows = db.execute(
            select(Feedback, Event.title, Event.event_date)
            .join(Event, Event.id == Feedback.event_id)
            .where(Feedback.student_id == student_id, Feedback.college_id == college_id)
            .order_by(Feedback.submitted_at.desc(), Feedback.id.desc())
        ).all()
        return [
            {
                "id": f.id,
                "event_id": f.event_id,
                "title": title,
                "event_date": event_date,
                "rating": f.rating,
                "comments": f.comments,
                "suggestions": f.suggestions,
                "anonymous": f.anonymous,
                "submitted_at": f.submitted_at,
            }
            for f, title, event_date in rows
        ]

feedback_crud = CRUDFeedback(Feedback)
