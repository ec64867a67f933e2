"""Main FastAPI application."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_i18n import __version__
from catalog_i18n.config import settings
from catalog_i18n.core import ConfigError, StorageError, ValidationError
from catalog_i18n.models.schemas import ApiResponse
from catalog_i18n.api.v1.routes import modules, scrape

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.log_level) -> None:
    """Configure root logging for the server and CLI."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    configure_logging()
    logger.info(
        "Translation store at %s (source=%s, languages=%s)",
        settings.i18n_root,
        settings.source_language,
        settings.languages,
    )
    yield


app = FastAPI(
    title=settings.app_name,
    description="Catalog scraping and translation management API",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ApiResponse(success=False, error=error).model_dump(mode="json"),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return _error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    return _error_response(400, f"Invalid request: {errors}")


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError):
    return _error_response(400, exc.message)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return _error_response(400, exc.message)


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    logger.error(f"[API] Storage failure: {exc.message}")
    return _error_response(500, exc.message)


# Include routers
app.include_router(modules.router, prefix="/api/v1", tags=["modules"])
app.include_router(scrape.router, prefix="/api/v1", tags=["scrape"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "Catalog i18n API", "version": __version__}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
