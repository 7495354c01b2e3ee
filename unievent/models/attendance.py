from enum import Enum
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import ForeignKey, UniqueConstraint, DateTime, String, func
from unievent.db.base import Base

class AttendanceOrigin(str, Enum):
    manual = "manual"
    qr = "qr"

class Attendance(Base):
    __tablename__ = "attendance"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    event_id: Mapped[int] = mapped_column(ForeignKey("events.id", ondelete="CASCADE"), index=True)
    student_id: Mapped[int] = mapped_column(ForeignKey("students.id", ondelete="CASCADE"), index=True)
    college_id: Mapped[int] = mapped_column(ForeignKey("colleges.id", ondelete="CASCADE"))
    origin: Mapped[str] = mapped_column(String(20), default=AttendanceOrigin.manual.value)
    checked_in_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    event = relationship("Event", back_populates="attendance")
    student = relationship("Student")

    __table_args__ = (UniqueConstraint("event_id", "student_id", name="uq_attendance_event_student"),)
