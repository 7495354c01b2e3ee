import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from unievent.core.errors import Forbidden, Unauthenticated
from unievent.core.tokens import decode_access
from unievent.crud.user import account_crud
from unievent.db.session import get_db
from unievent.models.admin import Admin

logger = logging.getLogger(__name__)


class Role(str, Enum):
    student = "student"
    admin = "admin"
    super_admin = "super_admin"


@dataclass(frozen=True)
class StudentPrincipal:
    id: int
    college_id: int

    @property
    def role(self) -> Role:
        return Role.student


@dataclass(frozen=True)
class AdminPrincipal:
    id: int
    college_id: int
    role: Role


Principal = Union[StudentPrincipal, AdminPrincipal]

# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization (sem usar OAuth2PasswordBearer)
# ----------------------------------------------------------------------
def get_bearer_token(authorization: str = Header(None, alias="Authorization")) -> str:
    if not authorization:
        raise Unauthenticated()
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise Unauthenticated("Invalid Authorization header")
    return parts[1]

# ----------------------------------------------------------------------
# Principal atual: o token só diz quem é, o banco diz o que vale agora
# ----------------------------------------------------------------------
def get_current_principal(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db),
) -> Principal:
    payload = decode_access(token)
    if payload is None:
        logger.warning("Rejected invalid or expired access token")
        raise Unauthenticated("Invalid or expired token")
    try:
        role = Role(payload["role"])
    except ValueError:
        raise Unauthenticated("Invalid or expired token")

    account = account_crud.get_live(db, user_id=payload["sub"], role=role.value)
    if account is None or not account.is_active:
        logger.warning("Token for missing or inactive account %s (%s)", payload["sub"], role.value)
        raise Forbidden("Account not found or inactive")

    # college and admin role come from the row, never from the token
    if isinstance(account, Admin):
        return AdminPrincipal(id=account.id, college_id=account.college_id, role=Role(account.role))
    return StudentPrincipal(id=account.id, college_id=account.college_id)
