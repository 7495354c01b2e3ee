# unievent/api/v1/reports.py
import datetime as dt
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from unievent.api.permissions import require_admin
from unievent.db.session import get_db
from unievent.schemas.report import (
    AttendancePercentageReport, AverageFeedbackReport, Leaderboard, ParticipationReport,
    PopularityReport, TopStudents,
)
from unievent.services import reports

router = APIRouter()

@router.get("/event-popularity", response_model=PopularityReport)
def event_popularity(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return {"report": reports.event_popularity(db, college_id=admin.college_id)}

@router.get("/student-participation", response_model=ParticipationReport)
def student_participation(
    start_date: Optional[dt.datetime] = None,
    end_date: Optional[dt.datetime] = None,
    event_type: Optional[str] = None,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    rows = reports.student_participation(
        db, college_id=admin.college_id, start_date=start_date, end_date=end_date, event_type=event_type
    )
    return {"report": rows}

@router.get("/leaderboard", response_model=Leaderboard)
def leaderboard(limit: int = Query(10, ge=1, le=100), db: Session = Depends(get_db), admin=Depends(require_admin)):
    return {"leaderboard": reports.leaderboard(db, college_id=admin.college_id, limit=limit)}

@router.get("/attendance-percentage", response_model=AttendancePercentageReport)
def attendance_percentage(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return {"report": reports.attendance_percentage(db, college_id=admin.college_id)}

@router.get("/average-feedback", response_model=AverageFeedbackReport)
def average_feedback(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return {"report": reports.average_feedback(db, college_id=admin.college_id)}

@router.get("/top-students", response_model=TopStudents)
def top_students(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return {"top_students": reports.top_students(db, college_id=admin.college_id)}
