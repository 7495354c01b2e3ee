# unievent/api/v1/feedback.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from unievent.api.permissions import require_admin, require_student
from unievent.crud.feedback import feedback_crud
from unievent.db.session import get_db
from unievent.schemas.common import Message
from unievent.schemas.feedback import EventFeedback, FeedbackCreate, FeedbackCreated, FeedbackUpdate, MyFeedbackList

router = APIRouter()

@router.post("", response_model=FeedbackCreated, status_code=status.HTTP_201_CREATED)
def submit_feedback(body: FeedbackCreate, db: Session = Depends(get_db), student=Depends(require_student)):
    fb = feedback_crud.submit(db, body, student_id=student.id, college_id=student.college_id)
    return FeedbackCreated(feedback_id=fb.id)

@router.put("/{feedback_id}", response_model=Message)
def update_feedback(
    feedback_id: int, body: FeedbackUpdate, db: Session = Depends(get_db), student=Depends(require_student)
):
    feedback_crud.update_own(db, feedback_id, body, student_id=student.id, college_id=student.college_id)
    return Message(message="Feedback updated successfully")

@router.get("/event/{event_id}", response_model=EventFeedback)
def event_feedback(event_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return feedback_crud.for_event(db, event_id=event_id, college_id=admin.college_id)

@router.get("/my-feedback", response_model=MyFeedbackList)
def my_feedback(db: Session = Depends(get_db), student=Depends(require_student)):
    return {"feedback": feedback_crud.mine(db, student_id=student.id, college_id=student.college_id)}
