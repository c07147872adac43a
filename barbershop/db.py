# barbershop/db.py

import logging

from sqlmodel import SQLModel, Session, create_engine, select

from barbershop.config import settings
from barbershop.data import DEFAULT_WORKING_HOURS

logger = logging.getLogger(__name__)

connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args["check_same_thread"] = False  # required for SQLite + FastAPI

engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    connect_args=connect_args,
)


def create_db_and_tables(bind=engine):
    # models must be imported so their tables are registered on the metadata
    from barbershop import models  # noqa: F401

    SQLModel.metadata.create_all(bind)


def seed_working_hours(session: Session) -> int:
    """Insert the default weekly hours when none exist. Returns rows added."""
    from barbershop.models import WorkingHours

    if session.exec(select(WorkingHours)).first() is not None:
        return 0

    for day, start, end, is_available in DEFAULT_WORKING_HOURS:
        session.add(
            WorkingHours(
                day_of_week=day,
                start_time=start,
                end_time=end,
                is_available=is_available,
            )
        )
    session.commit()
    logger.info("Seeded default working hours for %d days", len(DEFAULT_WORKING_HOURS))
    return len(DEFAULT_WORKING_HOURS)


# Dependency: one session per request
def get_session():
    with Session(engine) as session:
        yield session
