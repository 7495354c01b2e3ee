from enum import Enum
from typing import Optional
from datetime import datetime, time
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, Text, Integer, ForeignKey, DateTime, Time, func
from unievent.db.base import Base

class EventStatus(str, Enum):
    draft = "draft"
    active = "active"
    completed = "completed"
    cancelled = "cancelled"

TERMINAL_STATUSES = {EventStatus.completed.value, EventStatus.cancelled.value}

# draft -> active -> completed; cancelled from any non-terminal state
ALLOWED_TRANSITIONS = {
    EventStatus.draft.value: {EventStatus.active.value, EventStatus.cancelled.value},
    EventStatus.active.value: {EventStatus.completed.value, EventStatus.cancelled.value},
    EventStatus.completed.value: set(),
    EventStatus.cancelled.value: set(),
}

class Event(Base):
    __tablename__ = "events"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    college_id: Mapped[int] = mapped_column(ForeignKey("colleges.id", ondelete="CASCADE"), index=True)
    title: Mapped[str] = mapped_column(String(255))
    description: Mapped[Optional[str]] = mapped_column(Text(), nullable=True)
    event_date: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    start_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    end_time: Mapped[Optional[time]] = mapped_column(Time, nullable=True)
    venue: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    capacity: Mapped[int] = mapped_column(Integer)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    status: Mapped[str] = mapped_column(String(20), default=EventStatus.draft.value)
    qr_secret: Mapped[str] = mapped_column(String(255))
    created_by: Mapped[int] = mapped_column(ForeignKey("admins.id"))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    college = relationship("College", back_populates="events")
    creator = relationship("Admin")
    registrations = relationship("Registration", back_populates="event", cascade="all, delete-orphan")
    attendance = relationship("Attendance", back_populates="event", cascade="all, delete-orphan")
    feedback = relationship("Feedback", back_populates="event", cascade="all, delete-orphan")
    notes = relationship("Note", back_populates="event", cascade="all, delete-orphan")
    certificates = relationship("Certificate", back_populates="event", cascade="all, delete-orphan")
