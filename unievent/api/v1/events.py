# unievent/api/v1/events.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from unievent.api.deps import Principal, StudentPrincipal, get_current_principal
from unievent.api.permissions import require_admin
from unievent.crud.event import event_crud
from unievent.db.session import get_db
from unievent.schemas.event import (
    Event, EventCreate, EventCreated, EventDetailOut, EventList, EventQr, EventStatusName, EventUpdate,
)
from unievent.services.qr import build_qr_data, qr_data_uri

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("", response_model=EventList)
def list_events(
    status_: Optional[EventStatusName] = Query(None, alias="status"),
    category: Optional[str] = None,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    principal: Principal = Depends(get_current_principal),
):
    return event_crud.list_events(
        db, college_id=principal.college_id, status=status_, category=category, limit=limit, offset=offset
    )

@router.get("/{event_id}", response_model=EventDetailOut)
def get_event(event_id: int, db: Session = Depends(get_db), principal: Principal = Depends(get_current_principal)):
    student_id = principal.id if isinstance(principal, StudentPrincipal) else None
    detail = event_crud.get_detail(db, event_id=event_id, college_id=principal.college_id, student_id=student_id)
    return {"event": detail}

@router.post("", response_model=EventCreated, status_code=status.HTTP_201_CREATED)
def create_event(body: EventCreate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    event = event_crud.create_for_admin(db, body, college_id=admin.college_id, admin_id=admin.id)
    qr_data = build_qr_data(event)
    return EventCreated(event_id=event.id, qr_data=qr_data, qr_code=qr_data_uri(qr_data))

@router.put("/{event_id}", response_model=Event)
def update_event(event_id: int, body: EventUpdate, db: Session = Depends(get_db), admin=Depends(require_admin)):
    event = event_crud.get_in_college(db, event_id, admin.college_id)
    return event_crud.update_event(db, event, body)

@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    event_crud.get_in_college(db, event_id, admin.college_id)
    event_crud.remove(db, event_id)
    logger.info("Event %s deleted by admin %s", event_id, admin.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{event_id}/qr", response_model=EventQr)
def event_qr(event_id: int, db: Session = Depends(get_db), admin=Depends(require_admin)):
    event = event_crud.get_in_college(db, event_id, admin.college_id)
    qr_data = build_qr_data(event)
    return EventQr(event_id=event.id, qr_data=qr_data, qr_code=qr_data_uri(qr_data))
