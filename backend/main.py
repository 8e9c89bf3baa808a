"""
AutoTrack - Main FastAPI Application
Version: 1.2.0

Changelog:
v1.2.0 (2026-10-12): Car inspection upsert, image upload via R2
v1.1.0 (2026-10-05): Structured error envelope for every failure
v1.0.0 (2026-09-28): Initial FastAPI application
"""

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from contextlib import asynccontextmanager
import logging

from config import settings, init_directories
from errors import register_exception_handlers
from api import users, cars, accidents, fuel_efficiencies, maintenances
from api import periodic_inspections, tunings, car_inspections, images
from services.auth import verify_firebase_token

init_directories()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.FileHandler(f'{settings.LOGS_DIR}/api.log'),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    from models import init_db
    await init_db()

    if not settings.FIREBASE_PROJECT_ID:
        logger.warning("FIREBASE_PROJECT_ID is not set; authenticated routes will return 500")

    yield

    logger.info("Shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Vehicle maintenance tracking API",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Every /api route requires a Firebase ID token
auth = [Depends(verify_firebase_token)]

app.include_router(users.router, prefix="/api", tags=["Users"], dependencies=auth)
app.include_router(cars.router, prefix="/api", tags=["Cars"], dependencies=auth)
app.include_router(accidents.router, prefix="/api", tags=["Accidents"], dependencies=auth)
app.include_router(fuel_efficiencies.router, prefix="/api", tags=["Fuel Efficiencies"], dependencies=auth)
app.include_router(maintenances.router, prefix="/api", tags=["Maintenances"], dependencies=auth)
app.include_router(periodic_inspections.router, prefix="/api", tags=["Periodic Inspections"], dependencies=auth)
app.include_router(tunings.router, prefix="/api", tags=["Tunings"], dependencies=auth)
app.include_router(car_inspections.router, prefix="/api", tags=["Car Inspections"], dependencies=auth)
app.include_router(images.router, prefix="/api", tags=["Images"], dependencies=auth)


@app.get("/", response_class=PlainTextResponse)
async def health_check():
    """Unauthenticated health check"""
    return f"{settings.APP_NAME} v{settings.APP_VERSION} is running"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
        workers=settings.API_WORKERS
    )
