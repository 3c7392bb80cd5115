import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST, REGISTRY

from garment_erp.core.db.mongodb import connect_to_mongo, close_mongo_connection
from garment_erp.api.v1.api import api_router
from garment_erp.core.setting import config

# Import Prometheus middleware
from garment_erp.core.monitoring.prometheus_middleware import PrometheusMiddleware


logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Use lifespan context manager instead of @app.on_event for newer FastAPI versions
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    await connect_to_mongo()
    yield
    # Shutdown
    await close_mongo_connection()

app = FastAPI(
    title=config.PROJECT_NAME,
    version="0.1.0",
    openapi_url=f"{config.API_V1_STR}/openapi.json",
    lifespan=lifespan
)

# ============================================================================
# CORS Middleware
# ============================================================================
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================================
# Prometheus Middleware (Add BEFORE routes)
# ============================================================================
app.middleware("http")(PrometheusMiddleware())

# ============================================================================
# Validation Errors -> 400
# ============================================================================
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    messages = []
    for err in errors:
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{field}: {err.get('msg')}" if field else err.get("msg"))
    logger.info(f"Validation failed for {request.method} {request.url.path}: {messages}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "; ".join(messages) or "Invalid request"},
    )

# ============================================================================
# Metrics Endpoint (Add BEFORE api_router to avoid conflicts)
# ============================================================================
@app.get("/metrics")
async def metrics():
    """
    Prometheus metrics endpoint
    This endpoint is scraped by Prometheus to collect metrics
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST
    )

# ============================================================================
# Health Check Endpoint
# ============================================================================
@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring
    """
    return {
        "status": "healthy",
        "service": config.PROJECT_NAME,
        "version": "0.1.0"
    }

# ============================================================================
# API Router
# ============================================================================
app.include_router(api_router, prefix=config.API_V1_STR)

# ============================================================================
# Root Endpoint
# ============================================================================
@app.get("/")
async def root():
    return {
        "message": "Garment ERP API",
        "docs": "/redoc",
        "metrics": "/metrics",
        "health": "/health"
    }
