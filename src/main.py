from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger

from config.logging_config import setup_logging
from config.settings import get_settings
from middleware.origins import OriginAllowListMiddleware
from routers import payments


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Settings are loaded and validated first, so a missing Stripe secret,
    webhook secret, store credential or origin allow-list stops the
    application before it serves anything.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = get_settings()
    setup_logging(level=settings.LOG_LEVEL, serialize=settings.LOG_JSON)

    app = FastAPI(
        title="Registration Payments API",
        description="""
        # Registration Payments API

        ## Overview
        Paid registrations for founders, exhibitors, pitching startups and
        visitors. The API starts hosted Stripe checkouts and reconciles their
        completion webhooks against the registrant profiles.

        ## Endpoints
        - **Checkout**: `POST /create-checkout-session` returns a hosted checkout URL
        - **Webhook**: `POST /webhook` receives signed Stripe events
        - **Health**: `GET /` returns a plain text status line
        """,
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGIN_LIST,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        OriginAllowListMiddleware,
        allowed_origins=settings.ALLOWED_ORIGIN_LIST
    )

    app.include_router(payments.router, tags=["payments"])

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        """Answer malformed request bodies with the API's error body."""
        message = "Invalid request"
        errors = exc.errors()
        if errors:
            field = ".".join(
                str(part) for part in errors[0].get("loc", ()) if part != "body"
            )
            if field:
                message = f"{message}: {field}"
            message = f"{message}: {errors[0].get('msg', 'invalid value')}"
        logger.warning(f"{request.method} {request.url.path} rejected: {message}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": message}
        )

    @app.get(
        "/",
        response_class=PlainTextResponse,
        tags=["system"],
        summary="Health Check",
        description="Check if the API is running"
    )
    async def health_check() -> str:
        """Check API health status.

        Returns:
            str: Plain text status line
        """
        return "Registration payments server is running"

    return app


app = create_app()
