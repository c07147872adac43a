# barbershop/data.py

from datetime import time

# index matches date.weekday(): 0=Mon ... 6=Sun
WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

# (day_of_week, start, end, is_available)
DEFAULT_WORKING_HOURS = [
    ("monday", time(9, 0), time(18, 0), True),
    ("tuesday", time(9, 0), time(18, 0), True),
    ("wednesday", time(9, 0), time(18, 0), True),
    ("thursday", time(9, 0), time(18, 0), True),
    ("friday", time(9, 0), time(18, 0), True),
    ("saturday", time(9, 0), time(18, 0), True),
    ("sunday", time(9, 0), time(18, 0), False),
]


def weekday_name(day) -> str:
    return WEEKDAYS[day.weekday()]
