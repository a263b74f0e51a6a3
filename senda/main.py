import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from senda.api.routes import assistant, geocoding, health
from senda.core.config import settings
from senda.core.errors import register_exception_handlers
from senda.core.logging import setup_logging
from senda.core.middleware import LatencyMonitorMiddleware, RequestIdMiddleware

# Setup logging
logger = setup_logging()


# =============================================================================
# OpenAPI Tags Metadata
# =============================================================================
tags_metadata = [
    {
        "name": "geocoding",
        "description": "**Geocoding** - Resolve institution addresses to map coordinates, with AI-assisted fallback. / *Geocodificación de direcciones de instituciones.*",
    },
    {
        "name": "assistant",
        "description": "**AI Assistant** - Registration screening, semantic search expansion and impact summaries. / *Asistente IA para validación y búsqueda.*",
    },
    {
        "name": "health",
        "description": "**Health** - Liveness and readiness probes.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    yield

    logger.info("Shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
## Senda API

Backend services for **Senda**, the network connecting charitable institutions
with volunteers and donors in Santa Fe, Argentina.

*Data sources: OpenStreetMap Nominatim, Google Gemini*
    """,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(LatencyMonitorMiddleware)
app.add_middleware(RequestIdMiddleware)

register_exception_handlers(app)

app.include_router(
    geocoding.router, prefix=f"{settings.API_V1_PREFIX}/geocode", tags=["geocoding"]
)
app.include_router(
    assistant.router, prefix=f"{settings.API_V1_PREFIX}/assistant", tags=["assistant"]
)
app.include_router(health.router, prefix=f"{settings.API_V1_PREFIX}/health")
