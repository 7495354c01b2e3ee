from enum import Enum
from typing import Optional
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint, DateTime, func
from unievent.db.base import Base

class RegistrationStatus(str, Enum):
    registered = "registered"
    waitlisted = "waitlisted"
    cancelled = "cancelled"

class Registration(Base):
    __tablename__ = "registrations"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"), index=True)
    college_id: Mapped[int] = mapped_column(ForeignKey("colleges.id", ondelete="CASCADE"))
    status: Mapped[str] = mapped_column(String(20), default=RegistrationStatus.registered.value)
    waitlist_position: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    event = relationship("Event", back_populates="registrations")
    student = relationship("Student")

    # a cancelled row is reused on re-registration, so the pair stays unique
    __table_args__ = (UniqueConstraint("event_id", "student_id", name="uq_registration_event_student"),)
