from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy import String, DateTime, func
from unievent.db.base import Base

class College(Base):
    __tablename__ = "colleges"
    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    admins = relationship("Admin", back_populates="college")
    students = relationship("Student", back_populates="college")
    events = relationship("Event", back_populates="college")
