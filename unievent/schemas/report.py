from pydantic import BaseModel
from typing import Optional
import datetime as dt

# ---------------------------
# Report rows
# ---------------------------

class PopularityRow(BaseModel):
    id: int
    title: str
    registrations: int

class StudentAttendanceRow(BaseModel):
    id: int
    first_name: str
    last_name: str
    roll_number: str
    events_attended: int

class AttendancePercentageRow(BaseModel):
    id: int
    title: str
    registered_count: int
    attended_count: int
    attendance_percentage: Optional[float] = None

class AverageFeedbackRow(BaseModel):
    id: int
    title: str
    average_rating: Optional[float] = None
    feedback_count: int

class CollegeStats(BaseModel):
    total_events: int
    active_events: int
    total_students: int
    total_registrations: int
    total_attendance: int
    total_certificates: int

class StudentRow(BaseModel):
    id: int
    student_id: str
    email: str
    first_name: str
    last_name: str
    department: Optional[str] = None
    year_of_study: Optional[int] = None
    created_at: Optional[dt.datetime] = None

# ---------------------------
# Envelopes
# ---------------------------

class PopularityReport(BaseModel):
    report: list[PopularityRow]

class ParticipationReport(BaseModel):
    report: list[StudentAttendanceRow]

class Leaderboard(BaseModel):
    leaderboard: list[StudentAttendanceRow]

class TopStudents(BaseModel):
    top_students: list[StudentAttendanceRow]

class AttendancePercentageReport(BaseModel):
    report: list[AttendancePercentageRow]

class AverageFeedbackReport(BaseModel):
    report: list[AverageFeedbackRow]

class CollegeStatsOut(BaseModel):
    stats: CollegeStats

class StudentList(BaseModel):
    students: list[StudentRow]
