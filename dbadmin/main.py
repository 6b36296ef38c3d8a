import logging

from fastapi import FastAPI

from .api.routes_health import router as health_router
from .api.transformation import router as transformation_router
from .core.config import settings
from .core.db import create_db_and_tables

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="dbadmin", description="Database administration: transformed column values")

# Create tables if they don't exist
create_db_and_tables()

app.include_router(health_router)
app.include_router(transformation_router)
