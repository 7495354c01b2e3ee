from pydantic import BaseModel
from typing import Optional
from datetime import datetime

class RegistrationCreate(BaseModel):
    event_id: int

class AdmissionOut(BaseModel):
    message: str
    registration_id: int
    status: str
    waitlist_position: Optional[int] = None

class Registration(BaseModel):
    id: int
    event_id: int
    student_id: int
    status: str
    waitlist_position: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

class MyRegistration(Registration):
    title: str
    event_date: datetime
    venue: Optional[str] = None

class EventRegistration(Registration):
    first_name: str
    last_name: str
    roll_number: str

class MyRegistrations(BaseModel):
    registrations: list[MyRegistration]

class EventRegistrations(BaseModel):
    registrations: list[EventRegistration]
