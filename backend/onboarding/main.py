from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from onboarding.core.config import settings
from onboarding.core.exceptions import FieldValidationError, OnboardingException
from onboarding.core.logging import setup_logging
from onboarding.core.security_headers import install_security_headers_middleware
from onboarding.routers import dealers, search, verification


def _validation_field(loc: tuple) -> str:
    # ("body", "contact_email") / ("query", "country") -> the field name.
    parts = [str(part) for part in loc if part not in ("body", "query")]
    return ".".join(parts) or "body"


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)
    settings.validate_runtime_security()

    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_origin_regex=settings.cors_origin_regex,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_security_headers_middleware(app, settings)

    app.include_router(dealers.router, tags=["dealers"])
    app.include_router(verification.router, tags=["verification"])
    app.include_router(search.router, tags=["search"])

    @app.get("/health", tags=["health"])
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.exception_handler(OnboardingException)
    async def handle_onboarding_exception(_: Request, exc: OnboardingException) -> JSONResponse:
        headers = exc.headers if getattr(exc, "headers", None) else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(_: Request, exc: RequestValidationError) -> JSONResponse:
        errors = [(_validation_field(tuple(error.get("loc", ()))), error.get("msg", "")) for error in exc.errors()]
        wrapped = FieldValidationError(errors)
        return JSONResponse(status_code=wrapped.status_code, content=wrapped.to_dict())

    return app


app = create_app()
