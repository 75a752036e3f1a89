"""Pipeboard — FastAPI Application Entry Point.

Sales pipeline tracking: funnel, targets, team ranking and AI insights.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from app.database import init_db, test_connection
from app.api.auth_routes import router as auth_router
from app.api.sales_routes import router as sales_router
from app.api.dashboard_routes import router as dashboard_router
from app.api.ai_routes import router as ai_router
from app.core.errors import StoreUnavailableError
from app.core.logging import get_logger

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle."""
    logger.info("🚀 Pipeboard starting up...")
    if test_connection():
        try:
            init_db()
        except Exception as e:
            logger.error(f"❌ Table creation failed: {e}")
    else:
        logger.error("❌ Database NOT connected, store requests will answer 503")
    yield
    logger.info("Pipeboard shut down")


app = FastAPI(
    title="Pipeboard",
    description="Sales pipeline dashboard: opportunities, targets and team ranking.",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(auth_router)
app.include_router(sales_router)
app.include_router(dashboard_router)
app.include_router(ai_router)


@app.exception_handler(StoreUnavailableError)
async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
    """Refuse the request instead of treating an unreadable store as empty."""
    logger.error(f"Store unavailable on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=503,
        content={"detail": "Record store unavailable, try again later."},
    )


@app.get("/health", tags=["System"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "pipeboard",
        "version": "1.0.0",
    }
