import time
import logging
from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .exceptions import CORS_HEADERS, PayloadTooLargeError, create_error_response

logger = logging.getLogger(__name__)


class SecurityMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"

        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        # Log request (guard against missing client info)
        client_host = request.client.host if request.client else "unknown"
        logger.info(f"Request: {request.method} {request.url.path} from {client_host}")

        response = await call_next(request)

        duration = time.time() - start_time
        logger.info(f"Response: {response.status_code} in {duration:.3f}s")

        return response


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            response = await call_next(request)
            return response
        except PayloadTooLargeError:
            raise
        except Exception as e:
            logger.error(f"Unhandled error: {str(e)}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content=create_error_response("Internal server error"),
                headers=CORS_HEADERS,
            )


class RequestBodyLimitMiddleware:
    """Pure ASGI guard capping the bytes read from a request body.

    Once the ceiling is crossed, ``receive`` raises PayloadTooLargeError, every
    later ``send`` from the wrapped app is dropped, and the error is re-raised
    to the server so the request is torn down without an application
    response. This must wrap the whole middleware stack, otherwise Starlette's
    ServerErrorMiddleware frames a 500 before the error reaches us.

    ASGI has no primitive to drop the socket. What the client sees next is up
    to the server: uvicorn writes its own bare 500 when nothing was sent yet,
    then closes the connection.
    """

    def __init__(self, app: ASGIApp, max_body_size: int) -> None:
        self.app = app
        self.max_body_size = max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        received = 0
        tripped = False

        async def limited_receive() -> Message:
            nonlocal received, tripped
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    tripped = True
                    raise PayloadTooLargeError(
                        f"Request body exceeds {self.max_body_size} bytes"
                    )
            return message

        async def guarded_send(message: Message) -> None:
            if not tripped:
                await send(message)

        try:
            await self.app(scope, limited_receive, guarded_send)
        except PayloadTooLargeError:
            logger.warning(
                f"Aborting {scope.get('method')} {scope.get('path')}: body exceeds {self.max_body_size} bytes"
            )
            raise
        if tripped:
            raise PayloadTooLargeError(f"Request body exceeds {self.max_body_size} bytes")
