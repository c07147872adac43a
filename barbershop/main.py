# barbershop/main.py

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlmodel import Session

from barbershop.config import settings
from barbershop.db import create_db_and_tables, engine, seed_working_hours
from barbershop.routers import (
    auth_routes,
    availability_routes,
    bookings_routes,
    schedule_routes,
    services_routes,
    settings_routes,
    users_routes,
)

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    create_db_and_tables()
    if settings.seed_defaults:
        with Session(engine) as session:
            seed_working_hours(session)
    logger.info("Barbershop API started")
    yield


app = FastAPI(title="Barbershop API", lifespan=lifespan)

app.include_router(auth_routes.router)
app.include_router(users_routes.router)
app.include_router(settings_routes.router)
app.include_router(services_routes.router)
app.include_router(schedule_routes.router)
app.include_router(availability_routes.router)
app.include_router(bookings_routes.router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
