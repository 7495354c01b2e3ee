# unievent/api/v1/colleges.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from unievent.crud.college import college_crud
from unievent.db.session import get_db
from unievent.schemas.college import College, CollegeCreate

router = APIRouter()

# rotas públicas: sem college não há como se cadastrar
@router.post("", response_model=College, status_code=status.HTTP_201_CREATED)
def create_college(body: CollegeCreate, db: Session = Depends(get_db)):
    return college_crud.create(db, body)

@router.get("", response_model=List[College])
def list_colleges(db: Session = Depends(get_db)):
    return college_crud.list_all(db)
