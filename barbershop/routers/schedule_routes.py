# barbershop/routers/schedule_routes.py

import logging
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session, select

from barbershop.db import get_session
from barbershop.models import BlockedTime, WorkingHours
from barbershop.schemas import (
    BlockedTimeCreate,
    BlockedTimePublic,
    Message,
    WorkingHoursPublic,
    WorkingHoursUpdate,
)
from barbershop.auth import get_current_user
from barbershop.deps import require_role
from barbershop.data import WEEKDAYS

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["schedule"],
)


@router.get("/working-hours", response_model=List[WorkingHoursPublic])
def list_working_hours(session: Session = Depends(get_session)):
    rows = session.exec(select(WorkingHours)).all()
    return sorted(rows, key=lambda r: WEEKDAYS.index(r.day_of_week))


@router.put("/working-hours/{day_of_week}", response_model=WorkingHoursPublic)
def set_working_hours(
    day_of_week: str,
    hours: WorkingHoursUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")

    day_of_week = day_of_week.lower()
    if day_of_week not in WEEKDAYS:
        raise HTTPException(status_code=422, detail="day_of_week must be a weekday name, e.g. 'monday'")
    if hours.start_time >= hours.end_time:
        raise HTTPException(status_code=422, detail="start_time must be before end_time")

    # upsert: one row per weekday
    row = session.exec(
        select(WorkingHours).where(WorkingHours.day_of_week == day_of_week)
    ).first()
    if row is None:
        row = WorkingHours(day_of_week=day_of_week)
    row.start_time = hours.start_time
    row.end_time = hours.end_time
    row.is_available = hours.is_available

    session.add(row)
    session.commit()
    session.refresh(row)
    logger.info("Working hours for %s set to %s-%s", day_of_week, row.start_time, row.end_time)

    return row


@router.get("/blocked-times", response_model=List[BlockedTimePublic])
def list_blocked_times(
    on_date: Optional[date] = None,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")

    stmt = select(BlockedTime)
    if on_date is not None:
        stmt = stmt.where(BlockedTime.date == on_date)
    stmt = stmt.order_by(BlockedTime.date, BlockedTime.start_time)

    return session.exec(stmt).all()


@router.post("/blocked-times", response_model=BlockedTimePublic, status_code=201)
def create_blocked_time(
    block: BlockedTimeCreate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")

    start_time, end_time = block.start_time, block.end_time
    if block.is_all_day:
        start_time = end_time = None
    else:
        if start_time is None or end_time is None:
            raise HTTPException(status_code=422, detail="start_time and end_time are required unless the block is all day")
        if start_time >= end_time:
            raise HTTPException(status_code=422, detail="start_time must be before end_time")

    db_block = BlockedTime(
        date=block.date,
        start_time=start_time,
        end_time=end_time,
        is_all_day=block.is_all_day,
        reason=block.reason,
    )

    session.add(db_block)
    session.commit()
    session.refresh(db_block)
    logger.info("Blocked %s (%s)", db_block.date, "all day" if db_block.is_all_day else f"{start_time}-{end_time}")

    return db_block


@router.delete("/blocked-times/{block_id}", response_model=Message)
def delete_blocked_time(
    block_id: int,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    require_role(current_user, "admin")

    db_block = session.get(BlockedTime, block_id)
    if db_block is None:
        raise HTTPException(status_code=404, detail="Blocked time not found")

    session.delete(db_block)
    session.commit()

    return {"success": "Blocked time removed"}
