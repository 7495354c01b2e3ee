from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

class CollegeCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)

class College(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
