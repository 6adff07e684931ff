"""
Zcash RPC Backend API
Main application entry point with all routes and middleware.
"""

import os
import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import require_api_key
from .common import envelope
from .config import get_settings
from .routes import blockchain, wallet, transactions, network
from .schemas import ErrorResponse, HealthData, SuccessResponse
from .zcash import ZcashError

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO"),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# Version
VERSION = "1.0.0"

# Create FastAPI app
app = FastAPI(
    title="Zcash RPC Backend",
    description="REST API in front of a hosted Zcash node",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
)

# =============================================================================
# Middleware
# =============================================================================

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# GZip compression
app.add_middleware(GZipMiddleware, minimum_size=1000)


# =============================================================================
# Exception Handlers
# =============================================================================

def error_response(message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> JSONResponse:
    """Create standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(error=message).model_dump(),
    )


@app.exception_handler(ZcashError)
async def zcash_exception_handler(request: Request, exc: ZcashError):
    """Handle node failures; the status depends on the failure kind."""
    logger.warning(f"{request.method} {request.url.path} failed ({exc.kind}): {exc}")
    return error_response(str(exc), exc.status_code)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle auth, missing-parameter and routing errors."""
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
        message = "Not found"
    return error_response(message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors."""
    return error_response("Invalid request data", status.HTTP_422_UNPROCESSABLE_ENTITY)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)

    message = "An internal error occurred"
    if get_settings().debug:
        message = f"{message}: {exc}"
    return error_response(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


# =============================================================================
# Startup Events
# =============================================================================

@app.on_event("startup")
async def startup_event():
    """Log configuration problems on startup."""
    settings = get_settings()
    logger.info(f"Zcash RPC backend ({settings.node_env}) using node gateway {settings.rpc_url}")

    if not settings.api_key:
        logger.warning("API_KEY is not set; every request will be rejected")
    if not settings.rpc_api_key:
        logger.warning("ZCASH_API_KEY is not set; the node gateway may refuse calls")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down Zcash RPC backend")


# =============================================================================
# Include Routers
# =============================================================================

API_PREFIX = get_settings().api_prefix
protected = [Depends(require_api_key)]

app.include_router(blockchain.router, prefix=API_PREFIX, dependencies=protected)
app.include_router(wallet.router, prefix=API_PREFIX, dependencies=protected)
app.include_router(transactions.router, prefix=API_PREFIX, dependencies=protected)
app.include_router(network.router, prefix=API_PREFIX, dependencies=protected)


# =============================================================================
# Health & Status Endpoints
# =============================================================================

@app.get("/health", response_model=SuccessResponse, tags=["health"], dependencies=protected)
def health_check():
    """Liveness check. Does not contact the node."""
    return envelope(HealthData(
        status="ok",
        version=VERSION,
        environment=get_settings().node_env,
        timestamp=datetime.now(timezone.utc).isoformat(),
    ))


@app.get("/", response_model=SuccessResponse, tags=["root"], dependencies=protected)
def root():
    """Root endpoint with API information."""
    return envelope({
        "name": "Zcash RPC Backend",
        "version": VERSION,
        "status": "operational",
        "endpoints": {
            "docs": "/docs",
            "health": "/health",
            "blockchain": f"{API_PREFIX}/blockchain",
            "wallet": f"{API_PREFIX}/wallet",
            "transactions": f"{API_PREFIX}/transactions",
            "network": f"{API_PREFIX}/network",
            "mining": f"{API_PREFIX}/mining",
            "fee": f"{API_PREFIX}/fee",
        },
    })


def run() -> None:
    """Serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
