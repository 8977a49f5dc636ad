"""
Main application package initialization file.
Sets up the FastAPI application and imports all necessary components.
"""

import logging
import logging.config
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .config import settings, LOGGING_CONFIG
from .utils.database import connect_to_db, close_db_connection
from .utils.errors import register_exception_handlers

# Apply logging configuration once, when the application is created
logging.config.dictConfig(LOGGING_CONFIG)
logger = logging.getLogger(__name__)

# Initialize FastAPI application
app = FastAPI(
    title="Quiz App API",
    description="API for taking timed multiple-choice tests",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)

# Set up CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Import all routers
from .routes import auth, categories, tests, results, web  # noqa: E402

# Include all API routers
app.include_router(auth.router)
app.include_router(categories.router)
app.include_router(tests.router)
app.include_router(results.router)
app.include_router(web.router)

@app.on_event("startup")
async def startup_event():
    """
    Initialize application services when starting up
    """
    await connect_to_db()
    logger.info("Quiz App API started")

@app.on_event("shutdown")
async def shutdown_event():
    """
    Clean up application services when shutting down
    """
    await close_db_connection()

@app.get("/health", include_in_schema=False)
async def health_check():
    """
    Health check endpoint for monitoring
    """
    return {"status": "healthy"}
