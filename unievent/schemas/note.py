from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

class NoteUpsert(BaseModel):
    event_id: int
    content: str = Field(min_length=1, max_length=5000)

class Note(BaseModel):
    content: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
