# unievent/api/v1/admin.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from unievent.api.permissions import require_admin
from unievent.db.session import get_db
from unievent.schemas.report import CollegeStatsOut, StudentList
from unievent.services import reports
from unievent.services.certificates import issue_bulk

router = APIRouter()

class BulkCertificatesIn(BaseModel):
    event_id: int

@router.get("/college-stats", response_model=CollegeStatsOut)
def college_stats(db: Session = Depends(get_db), admin=Depends(require_admin)):
    return {"stats": reports.college_stats(db, college_id=admin.college_id)}

@router.get("/students", response_model=StudentList)
def list_students(
    search: Optional[str] = None,
    year_of_study: Optional[int] = Query(None, ge=1, le=10),
    department: Optional[str] = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    rows = reports.list_students(
        db, college_id=admin.college_id, search=search, year_of_study=year_of_study,
        department=department, limit=limit, offset=offset,
    )
    return {"students": rows}

@router.post("/bulk-certificates")
def bulk_certificates(body: BulkCertificatesIn, db: Session = Depends(get_db), admin=Depends(require_admin)):
    return issue_bulk(db, event_id=body.event_id, college_id=admin.college_id)
