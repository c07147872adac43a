# barbershop/services/availability.py

import logging
from datetime import datetime, date, time
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlmodel import Session, select

from barbershop.config import settings
from barbershop.core import compute_slots
from barbershop.data import weekday_name
from barbershop.models import BlockedTime, Booking, WorkingHours
from barbershop.schemas import BookingStatus, TimeSlot

logger = logging.getLogger(__name__)


def shop_now() -> datetime:
    """Current wall-clock time at the shop, naive like the stored times."""
    if settings.timezone:
        return datetime.now(ZoneInfo(settings.timezone)).replace(tzinfo=None)
    return datetime.now()


def get_available_slots(
    session: Session,
    day: date,
    duration: int,
    now: Optional[datetime] = None,
) -> List[TimeSlot]:
    working_hours = session.exec(
        select(WorkingHours)
        .where(WorkingHours.day_of_week == weekday_name(day))
        .where(WorkingHours.is_available == True)  # noqa: E712
    ).first()

    if working_hours is None:
        return []

    blocked_times = session.exec(
        select(BlockedTime).where(BlockedTime.date == day)
    ).all()

    bookings = session.exec(
        select(Booking)
        .where(Booking.appointment_date == day)
        .where(Booking.status == BookingStatus.confirmed.value)
    ).all()

    slots = compute_slots(
        day,
        working_hours,
        blocked_times,
        bookings,
        duration=duration,
        interval=settings.slot_interval_minutes,
        now=now or shop_now(),
    )
    logger.debug(
        "%s: %d of %d slots open for %d min",
        day, sum(1 for s in slots if s.available), len(slots), duration,
    )
    return slots


def check_slot_availability(
    session: Session,
    day: date,
    start_time: time,
    duration: int,
    now: Optional[datetime] = None,
) -> Tuple[bool, Optional[str]]:
    wanted = start_time.replace(tzinfo=None)
    for slot in get_available_slots(session, day, duration, now=now):
        if time.fromisoformat(slot.time) == wanted:
            return slot.available, slot.reason
    return False, "Time slot not found"
