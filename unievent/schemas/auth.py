# unievent/schemas/auth.py
from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

class AccountBase(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    college_id: int

class StudentRegister(AccountBase):
    student_id: str = Field(min_length=1, max_length=50)
    department: Optional[str] = Field(default=None, max_length=100)
    year_of_study: Optional[int] = Field(default=None, ge=1, le=10)

class AdminRegister(AccountBase):
    pass

class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1)

class UserRef(BaseModel):
    id: int
    email: str
    role: str

class LoginOut(BaseModel):
    message: str = "Login successful"
    token: str
    token_type: str = "bearer"
    user: UserRef
