# unievent/core/tokens.py
from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from unievent.core.config import settings

ALGO = settings.ALGORITHM

def _now() -> datetime:
    return datetime.now(timezone.utc)

def create_access_token(*, user_id: int, college_id: int, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Signed bearer credential carrying {id, college_id, role}."""
    expire = _now() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    payload: Dict[str, Any] = {
        "type": "access",
        "sub": str(user_id),
        "college_id": college_id,
        "role": role,
        "jti": uuid.uuid4().hex,
        "iat": int(_now().timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGO)

def decode_access(token: str) -> Optional[Dict[str, Any]]:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGO])
    except JWTError:
        return None
    if not isinstance(payload, dict):
        return None
    if payload.get("type") != "access":
        return None
    if not payload.get("sub") or not payload.get("role"):
        return None
    try:
        payload["sub"] = int(payload["sub"])
    except (TypeError, ValueError):
        return None
    return payload
