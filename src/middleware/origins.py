from typing import Iterable

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """Reject browser requests from origins outside the allow-list.

    Requests without an Origin header (Stripe webhooks, server-to-server
    calls, health checks) always pass. CORS response headers for allowed
    origins are added by Starlette's CORSMiddleware.
    """

    def __init__(self, app, allowed_origins: Iterable[str]) -> None:
        super().__init__(app)
        self.allowed_origins = frozenset(
            origin.rstrip("/") for origin in allowed_origins
        )

    def is_allowed(self, origin: str | None) -> bool:
        if not origin:
            return True
        return origin.rstrip("/") in self.allowed_origins

    async def dispatch(self, request: Request, call_next) -> Response:
        origin = request.headers.get("origin")
        if not self.is_allowed(origin):
            logger.warning(
                f"Blocked {request.method} {request.url.path} "
                f"from origin {origin}"
            )
            return JSONResponse(
                status_code=403,
                content={"error": "CORS Policy Error"}
            )
        return await call_next(request)
