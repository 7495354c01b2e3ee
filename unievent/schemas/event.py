from pydantic import AliasChoices, BaseModel, Field, field_validator
from typing import Optional, Literal
import datetime as dt

EventStatusName = Literal["draft", "active", "completed", "cancelled"]

# ---------------------------
# Event Schemas
# ---------------------------

class EventBase(BaseModel):
    title: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    event_date: dt.datetime
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    venue: str = Field(min_length=1, max_length=255)
    # aceita tanto "capacity" quanto o legado "max_participants"
    capacity: int = Field(ge=1, validation_alias=AliasChoices("capacity", "max_participants"))
    category: Optional[str] = Field(default=None, max_length=100)

    @field_validator("end_time")
    @classmethod
    def _check_time_order(cls, v: Optional[dt.time], info):
        start = info.data.get("start_time")
        if start and v and start >= v:
            raise ValueError("end_time must be later than start_time")
        return v

class EventCreate(EventBase):
    status: EventStatusName = "draft"

class EventUpdate(BaseModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    event_date: dt.datetime | None = None
    start_time: dt.time | None = None
    end_time: dt.time | None = None
    venue: str | None = Field(default=None, min_length=1, max_length=255)
    capacity: int | None = Field(default=None, ge=1, validation_alias=AliasChoices("capacity", "max_participants"))
    category: str | None = Field(default=None, max_length=100)
    status: EventStatusName | None = None

class Event(BaseModel):
    id: int
    college_id: int
    title: str
    description: Optional[str] = None
    event_date: dt.datetime
    start_time: Optional[dt.time] = None
    end_time: Optional[dt.time] = None
    venue: Optional[str] = None
    capacity: int
    category: Optional[str] = None
    status: str
    created_by: int
    created_at: Optional[dt.datetime] = None

    model_config = {"from_attributes": True}

class UserRegistration(BaseModel):
    status: str
    waitlist_position: Optional[int] = None

class EventListItem(Event):
    created_by_name: Optional[str] = None
    registered_count: int = 0
    waitlist_count: int = 0

class EventDetail(EventListItem):
    avg_rating: Optional[float] = None
    feedback_count: int = 0
    user_registration: Optional[UserRegistration] = None

class EventDetailOut(BaseModel):
    event: EventDetail

class Pagination(BaseModel):
    total: int
    limit: int
    offset: int
    has_more: bool

class EventList(BaseModel):
    events: list[EventListItem]
    pagination: Pagination

class EventCreated(BaseModel):
    message: str = "Event created successfully"
    event_id: int
    qr_data: str
    qr_code: str

class EventQr(BaseModel):
    event_id: int
    qr_data: str
    qr_code: str
