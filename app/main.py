import logging

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.exceptions import (
    AppError, app_error_handler, http_exception_handler,
    request_validation_handler, unhandled_exception_handler
)
from app.core.logging import setup_logging

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title=f"{settings.BUSINESS_NAME} Back Office")

# Set up CORS
app.add_middleware(
        CORSMiddleware,
        allow_origins=[str(origin) for origin in settings.BACKEND_CORS_ORIGINS],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Error envelope: {"error": ..., "details"?: [...]}
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.on_event("startup")
async def startup_event():
    """Create any missing tables"""
    from app.db.database import init_db
    try:
        init_db()
    except Exception as e:
        logger.error(f"Could not initialize database: {str(e)}. Run 'python init_db.py' manually.")

@app.get("/")
async def root():
    return {"message": f"{settings.BUSINESS_NAME} back office API"}

@app.get("/health")
async def health():
    return {"status": "ok"}
