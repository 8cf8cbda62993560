import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .interfaces.api import router
from .config import get_settings
from .infrastructure.observability import flush_langfuse
from .logging_config import configure_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events"""
    configure_logging("DEBUG" if settings.debug else settings.log_level)
    logger.info("%s starting with model %s", settings.app_name, settings.gemini_model)
    yield
    # Shutdown: push out any buffered traces
    flush_langfuse()


app = FastAPI(
    title=settings.app_name,
    description="Chat with Nova, a general-purpose assistant backed by Gemini",
    version="0.1.0",
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

# Include API routes
app.include_router(router)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "docs": "/docs",
    }
