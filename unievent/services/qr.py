import base64
import hmac
import io
import json
import secrets

import qrcode
from pydantic import ValidationError as PydanticValidationError

from unievent.core.errors import ValidationError
from unievent.models.event import Event
from unievent.schemas.attendance import QrPayload

# ids are 32-bit INTEGER columns; anything outside cannot name a row
MAX_ROW_ID = 2**31 - 1

def new_event_secret() -> str:
    return secrets.token_urlsafe(24)

def build_qr_data(event: Event) -> str:
    """JSON string printed into the event QR: {event_id, secret, college_id}."""
    return json.dumps(
        {"event_id": event.id, "secret": event.qr_secret, "college_id": event.college_id},
        separators=(",", ":"),
    )

def qr_data_uri(text: str) -> str:
    img = qrcode.make(text)
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    b64 = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/png;base64,{b64}"

def parse_qr_data(raw: str) -> QrPayload:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        raise ValidationError("Malformed QR data")
    if not isinstance(data, dict):
        raise ValidationError("Malformed QR data")
    try:
        return QrPayload.model_validate(data)
    except PydanticValidationError as exc:
        raise ValidationError("Malformed QR data", details=exc.errors(include_url=False, include_context=False))

def names_storable_event(payload: QrPayload) -> bool:
    return 1 <= payload.event_id <= MAX_ROW_ID

def proof_matches(event: Event | None, payload: QrPayload) -> bool:
    if event is None:
        return False
    same_event = event.id == payload.event_id
    same_college = event.college_id == payload.college_id
    same_secret = hmac.compare_digest(event.qr_secret.encode(), payload.secret.encode())
    return same_event and same_college and same_secret
