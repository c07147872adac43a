# barbershop/core.py

from datetime import datetime, timedelta, date, time
from typing import Iterable, List

from barbershop.schemas import BookingStatus, TimeSlot


def overlaps(start_a, end_a, start_b, end_b) -> bool:
    return start_a < end_b and start_b < end_a


def generate_time_slots(start: time, end: time, interval: int = 30) -> List[time]:
    """Start times from `start` up to (not including) `end`, `interval` minutes apart."""
    if interval <= 0:
        raise ValueError("interval must be a positive number of minutes")

    slots = []
    current = datetime.combine(date.min, start)
    stop = datetime.combine(date.min, end)
    step = timedelta(minutes=interval)
    while current < stop:
        slots.append(current.time())
        current += step
    return slots


def compute_slots(
    day: date,
    working_hours,
    blocked_times: Iterable,
    bookings: Iterable,
    duration: int,
    interval: int,
    now: datetime,
) -> List[TimeSlot]:
    """Mark every slot of a working day as available or not.

    `working_hours` needs `start_time`/`end_time`; blocked times need
    `is_all_day`, `start_time`, `end_time` and `reason`; bookings need
    `status`, `start_time` and `end_time`. All of them are assumed to belong
    to `day` already. Checks run in order and the first hit gives the reason:
    past, all-day block, timed block, confirmed booking, closing time.
    """
    blocked_times = list(blocked_times)
    confirmed = [b for b in bookings if b.status == BookingStatus.confirmed.value]

    work_end = datetime.combine(day, working_hours.end_time)
    length = timedelta(minutes=duration)

    result = []
    for start in generate_time_slots(working_hours.start_time, working_hours.end_time, interval):
        slot_start = datetime.combine(day, start)
        slot_end = slot_start + length
        label = start.strftime("%H:%M")

        if slot_start <= now:
            result.append(TimeSlot(time=label, available=False, reason="Past time"))
            continue

        reason = _blocked_reason(day, slot_start, slot_end, blocked_times)
        if reason is not None:
            result.append(TimeSlot(time=label, available=False, reason=reason))
            continue

        booked = False
        for b in confirmed:
            booking_start = datetime.combine(day, b.start_time)
            booking_end = datetime.combine(day, b.end_time)
            if overlaps(slot_start, slot_end, booking_start, booking_end):
                booked = True
                break
        if booked:
            result.append(TimeSlot(time=label, available=False, reason="Booked"))
            continue

        if slot_end > work_end:
            result.append(TimeSlot(time=label, available=False, reason="Not enough time"))
            continue

        result.append(TimeSlot(time=label, available=True))

    return result


def _blocked_reason(day, slot_start, slot_end, blocked_times):
    for block in blocked_times:
        if block.is_all_day:
            return block.reason or "Unavailable"
        if block.start_time is None or block.end_time is None:
            continue
        block_start = datetime.combine(day, block.start_time)
        block_end = datetime.combine(day, block.end_time)
        if overlaps(slot_start, slot_end, block_start, block_end):
            return block.reason or "Blocked"
    return None
