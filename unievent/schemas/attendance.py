from __future__ import annotations
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class ManualAttendanceIn(BaseModel):
    event_id: int
    student_id: int


class QrCheckinIn(BaseModel):
    qr_data: str = Field(min_length=1)


class QrPayload(BaseModel):
    """Conteúdo do QR impresso no evento."""
    event_id: int
    secret: str = Field(min_length=1)
    college_id: int


class AttendanceRow(BaseModel):
    id: int
    student_id: int
    first_name: str
    last_name: str
    roll_number: str
    origin: str
    checked_in_at: Optional[datetime] = None


class EventAttendance(BaseModel):
    attendance: list[AttendanceRow]
