from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from label_registry import __version__
from label_registry.config import Settings, settings
from label_registry.middleware.api_key import API_KEY_HEADER, ApiKeyMiddleware
from label_registry.middleware.security_headers import SecurityHeadersMiddleware
from label_registry.repositories.label_store import JsonLabelStore
from label_registry.services.errors import RegistryError
from label_registry.services.sequencer import build_sequencer
from label_registry.web.label_routes import router as label_router
from label_registry.web.state_routes import router as state_router
from label_registry.web.frontend_routes import router as frontend_router
from contextlib import asynccontextmanager
from pathlib import Path
from typing import List, Optional

import logging
import sys


def configure_logging(app_settings: Settings) -> None:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if app_settings.LOG_DIR:
        log_dir = Path(app_settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_dir / "app.log", encoding="utf-8"))

    logging.basicConfig(
        level=logging.DEBUG if app_settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


configure_logging(settings)
logger = logging.getLogger(__name__)


def _format_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "valor inválido")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Solicitud inválida"


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Each app owns its store and sequencer (kept in ``app.state``) so tests
    can build isolated instances from their own Settings.
    """
    app_settings = app_settings or settings
    store = JsonLabelStore.from_settings(app_settings)
    sequencer = build_sequencer(
        app_settings.stored_mode,
        app_settings.BARCODE_PREFIX,
        app_settings.BARCODE_DIGITS,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan event handler for startup and shutdown events"""
        logger.info("[>>] Starting label registry...")
        store.ensure_data_file()
        logger.info(
            f"[OK] Mode={app_settings.STATE_MODE} data={store.path} "
            f"api_key={'on' if app_settings.API_KEY else 'off'}"
        )
        yield
        logger.info("[<<] Shutting down label registry...")

    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Barcode label generator and registry",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.store = store
    app.state.sequencer = sequencer

    @app.exception_handler(RegistryError)
    async def registry_exception_handler(request: Request, exc: RegistryError):
        return JSONResponse(content={"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            content={"error": _format_validation_error(exc)}, status_code=400
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Log every unhandled exception"""
        logger.error(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            content={"error": "Error interno del servidor"}, status_code=500
        )

    app.add_middleware(SecurityHeadersMiddleware)

    # Shared-secret gate; no-op when API_KEY is unset
    app.add_middleware(ApiKeyMiddleware, api_key=app_settings.API_KEY)

    # CORS outermost so preflight requests are answered before the key check
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins_list,
        allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
        allow_headers=["Content-Type", API_KEY_HEADER],
    )

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "mode": app_settings.STATE_MODE}

    app.include_router(state_router)
    app.include_router(label_router)

    # Catch-all, keep last
    app.include_router(frontend_router)

    return app


def get_port_from_args(argv: List[str]) -> Optional[int]:
    """
    Port from ``--port N`` or ``--port=N``; None if absent or not a number.
    """
    for i, arg in enumerate(argv):
        value = None
        if arg == "--port" and i + 1 < len(argv):
            value = argv[i + 1]
        elif arg.startswith("--port="):
            value = arg.split("=", 1)[1]
        if value is None:
            continue
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Ignoring invalid --port value: {value!r}")
    return None


app = create_app()


def main(argv: Optional[List[str]] = None) -> None:
    import uvicorn

    port = get_port_from_args(sys.argv[1:] if argv is None else argv) or settings.PORT
    logger.info(f"Servidor escuchando en http://localhost:{port}")
    uvicorn.run(app, host=settings.HOST, port=port)


if __name__ == "__main__":
    main()
