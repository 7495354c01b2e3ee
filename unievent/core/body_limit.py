from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send


def _too_large(max_body_size: int) -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={
            "code": "PAYLOAD_TOO_LARGE",
            "message": "Request body too large.",
            "details": {"max_bytes": max_body_size},
        },
    )


class BodySizeLimitMiddleware:
    """Rejects request bodies larger than max_body_size.

    A declared Content-Length is checked up front. Bodies without one (chunked
    transfer) are read and counted before the app sees them, and the buffered
    bytes are then replayed to the app as a single message.
    """

    def __init__(self, app: ASGIApp, max_body_size: int):
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["method"] not in {"POST", "PUT", "PATCH"}:
            await self.app(scope, receive, send)
            return

        length = None
        for name, value in scope["headers"]:
            if name == b"content-length":
                length = value
                break
        if length is not None:
            try:
                too_large = int(length) > self.max_body_size
            except ValueError:
                response = JSONResponse(
                    status_code=400,
                    content={"code": "VALIDATION_ERROR", "message": "Invalid Content-Length header.", "details": None},
                )
                await response(scope, receive, send)
                return
            if too_large:
                await _too_large(self.max_body_size)(scope, receive, send)
                return

        body = b""
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body += message.get("body", b"")
            if len(body) > self.max_body_size:
                await _too_large(self.max_body_size)(scope, receive, send)
                return
            if not message.get("more_body", False):
                break

        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)
