from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class FeedbackCreate(BaseModel):
    event_id: int
    rating: int = Field(ge=1, le=5)
    comments: Optional[str] = Field(default=None, max_length=1000)
    suggestions: Optional[str] = Field(default=None, max_length=1000)
    anonymous: bool = False

class FeedbackUpdate(BaseModel):
    """Partial update: only the fields actually sent are applied."""
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    comments: Optional[str] = Field(default=None, max_length=1000)
    suggestions: Optional[str] = Field(default=None, max_length=1000)
    anonymous: Optional[bool] = None

class FeedbackCreated(BaseModel):
    message: str = "Feedback submitted successfully"
    feedback_id: int

class FeedbackRow(BaseModel):
    id: int
    event_id: int
    rating: int
    comments: Optional[str] = None
    suggestions: Optional[str] = None
    anonymous: bool
    submitted_at: Optional[datetime] = None
    student_name: str
    roll_number: Optional[str] = None

class FeedbackSummary(BaseModel):
    total_feedback: int
    average_rating: float
    rating_distribution: dict[int, int]

class EventFeedback(BaseModel):
    feedback: list[FeedbackRow]
    summary: FeedbackSummary

class MyFeedback(BaseModel):
    id: int
    event_id: int
    title: str
    event_date: datetime
    rating: int
    comments: Optional[str] = None
    suggestions: Optional[str] = None
    anonymous: bool
    submitted_at: Optional[datetime] = None

class MyFeedbackList(BaseModel):
    feedback: list[MyFeedback]
