"""FastAPI application factory."""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from cajachica.ai.provider import SuggestionProvider
from cajachica.config import DEFAULT_SESSION_SECRET, Settings
from cajachica.database.base import Database
from cajachica.domain import errors
from cajachica.web.routes import asientos, cuentas, dashboard, entidades, reportes, transacciones, voice

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Error interno del servidor"
INVALID_DATA = "Datos inválidos"

# Most specific first; the first matching class decides the status.
ERROR_STATUS = (
    (errors.NotFoundError, 404),
    (errors.ProviderError, 500),
    (errors.ValidationError, 400),
    (errors.ConflictError, 400),
    (errors.DependencyError, 400),
    (errors.DomainError, 400),
)


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


def register_error_handlers(app: FastAPI) -> None:
    """Translate exceptions into ``{"error": message}`` responses."""

    @app.exception_handler(errors.DomainError)
    async def domain_error_handler(request: Request, exc: errors.DomainError) -> JSONResponse:
        status_code = next(code for cls, code in ERROR_STATUS if isinstance(exc, cls))
        if status_code >= 500:
            # Provider detail stays in the log
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return _error(status_code, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return _error(400, INVALID_DATA, details=jsonable_encoder(exc.errors()))

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, INTERNAL_ERROR)


def create_app(
    db: Optional[Database] = None,
    provider: Optional[SuggestionProvider] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Build the API application.

    Args:
        db: Database to serve; built from settings when omitted
        provider: Suggestion provider; a Gemini provider when omitted
        settings: Runtime settings; read from the environment when omitted
    """
    settings = settings or Settings.from_env()
    if settings.session_secret == DEFAULT_SESSION_SECRET:
        logger.warning("CAJACHICA_SESSION_SECRET is not set; using the insecure default")

    if db is None:
        from cajachica.database.factories import create_database

        db = create_database(database_url=settings.database_url, database_path=settings.db_path)
        db.initialize_schema()
    if provider is None:
        from cajachica.ai.gemini import GeminiProvider

        provider = GeminiProvider(settings.google_api_key, settings.gemini_model)

    app = FastAPI(title="Mi Caja Chica")
    app.state.db = db
    app.state.provider = provider
    app.state.settings = settings

    app.add_middleware(SessionMiddleware, secret_key=settings.session_secret, same_site="lax")
    register_error_handlers(app)

    for module in (entidades, cuentas, asientos, transacciones, dashboard, reportes, voice):
        app.include_router(module.router)

    return app
