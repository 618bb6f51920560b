"""
FastAPI Main Application

Entry point for the fabric ledger API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..ledger import LedgerValidationError, NotFoundError
from .config import settings
from .database import build_store, dispose_engine
from .routes import bills_router, khatas_router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info(f"Starting Fabric Ledger API ({settings.data_mode} mode)...")
    app.state.store = build_store(settings)
    yield
    # Shutdown
    logger.info("Shutting down Fabric Ledger API...")
    app.state.store.close()
    dispose_engine()


app = FastAPI(
    title="Fabric Ledger API",
    description="Khata and bill ledger API for the fabrics business dashboard",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_api_requests(request: Request, call_next):
    """Log every API request."""
    if request.url.path.startswith("/api"):
        logger.info(f"{request.method} {request.url.path}")
    return await call_next(request)


# Error handlers
@app.exception_handler(LedgerValidationError)
async def validation_error_handler(request: Request, exc: LedgerValidationError):
    logger.warning(f"Rejected {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=400, content={"error": exc.message})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning(f"Not found on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=404, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    logger.warning(f"Invalid request parameters on {request.url.path}: {details}")
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request parameters", "details": details},
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


# Include routers
app.include_router(bills_router, prefix="/api")
app.include_router(khatas_router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": "Fabric Ledger API",
        "version": "1.0.0",
        "status": "running",
    }


@app.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    store = getattr(request.app.state, "store", None)
    return {
        "status": "healthy",
        "dataMode": store.MODE if store is not None else settings.data_mode,
    }


@app.get("/api")
async def api_info():
    """API information endpoint."""
    return {
        "endpoints": {
            "bills": "/api/ledger/bill",
            "khatas": "/api/ledger/khata",
        },
        "authentication": "X-User-ID header required in production",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "python.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
    )
