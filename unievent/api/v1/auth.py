# unievent/api/v1/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from unievent.core.tokens import create_access_token
from unievent.crud.user import account_crud, account_role
from unievent.db.session import get_db
from unievent.models.admin import AdminRole
from unievent.schemas.auth import AdminRegister, LoginIn, LoginOut, StudentRegister, UserRef

router = APIRouter()

@router.post("/register/student", status_code=status.HTTP_201_CREATED)
def register_student(body: StudentRegister, db: Session = Depends(get_db)):
    student = account_crud.create_student(db, body)
    return {"message": "Student registered successfully", "studentId": student.id}

@router.post("/register/admin", status_code=status.HTTP_201_CREATED)
def register_admin(body: AdminRegister, db: Session = Depends(get_db)):
    # self-service sempre cria admin comum; super_admin só via seed
    admin = account_crud.create_admin(db, body, role=AdminRole.admin)
    return {"message": "Admin registered successfully", "adminId": admin.id}

@router.post("/login", response_model=LoginOut)
def login(body: LoginIn, db: Session = Depends(get_db)):
    account = account_crud.authenticate(db, body.email, body.password)
    role = account_role(account)
    token = create_access_token(user_id=account.id, college_id=account.college_id, role=role)
    return LoginOut(token=token, user=UserRef(id=account.id, email=account.email, role=role))
