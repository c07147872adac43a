# barbershop/routers/settings_routes.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from barbershop.db import get_session
from barbershop.models import User
from barbershop.schemas import Message, SessionUser, SettingsUpdate
from barbershop.auth import get_current_user, is_oauth_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/settings",
    tags=["settings"],
)


@router.get("", response_model=SessionUser)
def read_settings(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    user = session.get(User, current_user["id"])
    if user is None:
        raise HTTPException(status_code=404, detail="User not found in database")

    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "image": user.image,
        "is_oauth": is_oauth_user(session, user),
    }


@router.patch("", response_model=Message)
def update_settings(
    values: SettingsUpdate,
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    user = session.get(User, current_user["id"])
    if user is None:
        raise HTTPException(status_code=404, detail="User not found in database")

    user.name = values.name
    user.image = values.image
    session.add(user)
    session.commit()
    logger.info("Updated settings for user %s", user.id)

    return {"success": "Settings updated successfully!"}
