# barbershop/routers/availability_routes.py

import logging
from datetime import date, time
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from barbershop.db import get_session
from barbershop.schemas import AvailabilityResponse, SlotCheckResponse
from barbershop.services.availability import check_slot_availability, get_available_slots
from barbershop.services.catalog import get_service_or_404

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/availability",
    tags=["availability"],
)


@router.get("", response_model=AvailabilityResponse)
def available_slots(
    service_id: int,
    date: date,
    duration: Optional[int] = Query(default=None, gt=0),
    session: Session = Depends(get_session),
):
    service = get_service_or_404(session, service_id)
    # an explicit duration overrides the service's own length
    minutes = duration or service.duration

    try:
        slots = get_available_slots(session, date, minutes)
    except SQLAlchemyError:
        logger.exception("Error getting available slots for %s", date)
        raise HTTPException(status_code=500, detail="Failed to get available slots")

    return {"service_id": service_id, "date": date, "slots": slots}


@router.get("/check", response_model=SlotCheckResponse)
def check_slot(
    service_id: int,
    date: date,
    start_time: time,
    duration: Optional[int] = Query(default=None, gt=0),
    session: Session = Depends(get_session),
):
    service = get_service_or_404(session, service_id)
    minutes = duration or service.duration

    try:
        available, reason = check_slot_availability(session, date, start_time, minutes)
    except SQLAlchemyError:
        logger.exception("Error checking slot availability for %s %s", date, start_time)
        raise HTTPException(status_code=500, detail="Failed to check availability")

    return {"available": available, "reason": reason}
