# barbershop/routers/bookings_routes.py

import logging
from datetime import datetime, timedelta, date
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from barbershop.db import get_session
from barbershop.models import Booking, User, utcnow
from barbershop.schemas import (
    BookingCancel,
    BookingCreate,
    BookingPublic,
    BookingStatus,
    BookingUpdate,
)
from barbershop.auth import get_current_user
from barbershop.deps import is_admin, require_role
from barbershop.core import overlaps
from barbershop.services.availability import check_slot_availability, shop_now
from barbershop.services.catalog import get_service_or_404

logger = logging.getLogger(__name__)

SLOT_TAKEN = "This time slot is already booked. Please choose a different time."

router = APIRouter(
    prefix="/bookings",
    tags=["bookings"],
)


def _bookable_service(session: Session, service_id: int):
    service = get_service_or_404(session, service_id)
    if not service.is_active:
        raise HTTPException(status_code=422, detail="This service is currently not available for booking")
    return service


def _conflicting_booking(
    session: Session,
    appointment_date: date,
    start,
    end,
    exclude_id: Optional[int] = None,
) -> Optional[Booking]:
    """First confirmed booking that day whose [start, end) overlaps the given range."""
    confirmed = session.exec(
        select(Booking)
        .where(Booking.appointment_date == appointment_date)
        .where(Booking.status == BookingStatus.confirmed.value)
    ).all()

    for b in confirmed:
        if b.id == exclude_id:
            continue
        if overlaps(start, end, b.start_time, b.end_time):
            return b
    return None


def _status_filter(status: str):
    allowed = [s.value for s in BookingStatus] + ["all"]
    if status not in allowed:
        raise HTTPException(status_code=422, detail=f"status must be one of {', '.join(allowed)}")


@router.post("", response_model=BookingPublic, status_code=201)
def create_booking(
    booking: BookingCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    admin = is_admin(current_user)

    # 1) Validate service
    service = _bookable_service(session, booking.service_id)

    # 2) Build booking interval
    start_dt = datetime.combine(booking.appointment_date, booking.start_time)
    if booking.end_time is not None:
        end_dt = datetime.combine(booking.appointment_date, booking.end_time)
    else:
        end_dt = start_dt + timedelta(minutes=service.duration)
    if end_dt <= start_dt or end_dt.date() != booking.appointment_date:
        raise HTTPException(status_code=422, detail="end_time must be after start_time on the same day")

    # 3) Prevent booking in the past (shop local time)
    if start_dt <= shop_now():
        raise HTTPException(status_code=422, detail="Cannot book an appointment in the past")

    # 4) Only admins pick the status or book for someone else
    if booking.status is not None and booking.status != BookingStatus.pending and not admin:
        raise HTTPException(status_code=403, detail="Forbidden")
    customer_id = current_user["id"]
    if booking.customer_id is not None and booking.customer_id != customer_id:
        if not admin:
            raise HTTPException(status_code=403, detail="Forbidden")
        if session.get(User, booking.customer_id) is None:
            raise HTTPException(status_code=404, detail="Customer not found")
        customer_id = booking.customer_id

    # 5) Reject overlaps with confirmed bookings
    if _conflicting_booking(session, booking.appointment_date, start_dt.time(), end_dt.time()):
        raise HTTPException(status_code=409, detail=SLOT_TAKEN)

    # 6) Customers only take open slots; admins book walk-ins at any time
    if not admin:
        minutes = int((end_dt - start_dt).total_seconds() // 60)
        available, reason = check_slot_availability(session, booking.appointment_date, start_dt.time(), minutes)
        if not available:
            if reason == "Booked":
                raise HTTPException(status_code=409, detail=SLOT_TAKEN)
            raise HTTPException(status_code=422, detail=f"Time slot not available: {reason}")

    # 7) Create and save booking
    db_booking = Booking(
        customer_id=customer_id,
        service_id=service.id,
        appointment_date=booking.appointment_date,
        start_time=start_dt.time(),
        end_time=end_dt.time(),
        status=(booking.status or BookingStatus.pending).value,
        total_price=booking.total_price if booking.total_price is not None else service.price,
        notes=booking.notes,
    )

    session.add(db_booking)
    try:
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Create booking error")
        raise HTTPException(status_code=500, detail="Failed to create booking. Please try again.")

    session.refresh(db_booking)  # fills db_booking.id
    logger.info(
        "Booking %s created for user %s: service %s on %s at %s",
        db_booking.id, customer_id, service.id, db_booking.appointment_date, db_booking.start_time,
    )
    return db_booking


@router.put("/{booking_id}", response_model=BookingPublic)
def update_booking(
    booking_id: int,
    booking: BookingUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")

    target = session.get(Booking, booking_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    _bookable_service(session, booking.service_id)

    if booking.end_time <= booking.start_time:
        raise HTTPException(status_code=422, detail="end_time must be after start_time on the same day")

    if booking.status == BookingStatus.confirmed:
        conflict = _conflicting_booking(
            session, booking.appointment_date, booking.start_time, booking.end_time, exclude_id=target.id,
        )
        if conflict is not None:
            raise HTTPException(status_code=409, detail=SLOT_TAKEN)

    target.service_id = booking.service_id
    target.appointment_date = booking.appointment_date
    target.start_time = booking.start_time
    target.end_time = booking.end_time
    target.status = booking.status.value
    target.total_price = booking.total_price
    target.notes = booking.notes
    target.cancel_reason = booking.cancel_reason
    target.updated_at = utcnow()

    session.add(target)
    try:
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Update booking error for booking %s", booking_id)
        raise HTTPException(status_code=500, detail="Failed to update booking. Please try again.")

    session.refresh(target)
    logger.info("Booking %s updated, status %s", target.id, target.status)
    return target


@router.patch("/{booking_id}/cancel", response_model=BookingPublic)
def cancel_booking(
    booking_id: int,
    body: Optional[BookingCancel] = None,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    # 1) Find the booking in DB
    target = session.get(Booking, booking_id)
    if target is None:
        raise HTTPException(status_code=404, detail="Booking not found")

    # 2) Already cancelled?
    if target.status == BookingStatus.cancelled.value:
        raise HTTPException(status_code=409, detail="Booking already cancelled")

    # 3) Authorization: the customer who booked OR an admin
    if current_user["id"] != target.customer_id and not is_admin(current_user):
        raise HTTPException(status_code=403, detail="Forbidden")

    # 4) Cancel and persist
    target.status = BookingStatus.cancelled.value
    if body is not None and body.cancel_reason:
        target.cancel_reason = body.cancel_reason
    target.updated_at = utcnow()
    session.add(target)
    session.commit()
    session.refresh(target)
    logger.info("Booking %s cancelled by user %s", target.id, current_user["id"])

    return target


@router.get("/me", response_model=List[BookingPublic])
def list_my_bookings(
    status: str = "all",
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    _status_filter(status)

    stmt = select(Booking).where(Booking.customer_id == current_user["id"])

    if status != "all":
        stmt = stmt.where(Booking.status == status)

    stmt = stmt.order_by(Booking.appointment_date, Booking.start_time)

    return session.exec(stmt).all()


@router.get("", response_model=List[BookingPublic])
def list_bookings(
    status: str = "all",
    on_date: Optional[date] = None,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")
    _status_filter(status)

    stmt = select(Booking)

    if on_date is not None:
        stmt = stmt.where(Booking.appointment_date == on_date)

    if status != "all":
        stmt = stmt.where(Booking.status == status)

    stmt = stmt.order_by(Booking.appointment_date, Booking.start_time)

    return session.exec(stmt).all()
