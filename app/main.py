from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import sys
import os

# Add the app directory to the Python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.core.config import settings
from app.core.logging import configure_logging
from app.api.v1.api import api_router
from app.core.database import init_db

# Configure logging
configure_logging()

app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.DESCRIPTION,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json"
)

# Set up CORS middleware with appropriate origins
origins = ["*"] if settings.ALLOW_ALL_ORIGINS else [str(origin) for origin in settings.BACKEND_CORS_ORIGINS]

# Note: When allow_origins=["*"], allow_credentials must be False under the CORS rules
allow_credentials = not settings.ALLOW_ALL_ORIGINS

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=allow_credentials,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,  # Maximum time (in seconds) that results can be cached
)

# Include API router
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.on_event("startup")
async def startup_event():
    """Initialize database on startup"""
    init_db(recreate=False)

@app.get("/")
async def root():
    return {"message": "Welcome to the Court Filing Alert API"}

@app.get("/health")
async def health():
    return {"status": "ok"}
