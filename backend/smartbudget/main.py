"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from smartbudget.config import settings
from smartbudget.api.router import api_router
from smartbudget.database import init_db
from smartbudget.exceptions import DuplicateCategoryError, ResourceNotFoundError
from smartbudget.services.bulk_categorization_service import BulkCategorizationService
from smartbudget.services.feedback_service import FeedbackService

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    app.state.bulk_categorization_service = BulkCategorizationService()
    app.state.feedback_service = FeedbackService()
    logger.info(f"{settings.app_name} started")
    yield
    app.state.bulk_categorization_service.shutdown(wait=True)
    app.state.feedback_service.shutdown(wait=True)


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version="1.0.0",
    description="Personal finance tracker with rule-based transaction categorization",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ResourceNotFoundError)
async def handle_not_found(request: Request, exc: ResourceNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(DuplicateCategoryError)
async def handle_duplicate(request: Request, exc: DuplicateCategoryError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


# Include API router
app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/api/v1/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "app_name": settings.app_name
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("smartbudget.main:app", host=settings.api_host, port=settings.api_port)
