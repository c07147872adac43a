# barbershop/routers/auth_routes.py

import logging

import httpx
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel import Session, select

from barbershop.db import get_session
from barbershop.models import User
from barbershop.schemas import SessionUser, Token
from barbershop.auth import (
    create_state_token,
    get_current_user,
    is_oauth_user,
    issue_user_token,
    verify_password,
    verify_state_token,
)
from barbershop.services import google_oauth

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


@router.post("/login", response_model=Token)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: Session = Depends(get_session),
):
    # OAuth2 "password" flow uses the "username" field for the email
    email = form_data.username
    password = form_data.password

    user = session.exec(
        select(User).where(User.email == email)
    ).first()

    # OAuth-only users have no password to check against
    if user is None or user.password_hash is None or not verify_password(password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = issue_user_token(session, user)
    return {"access_token": token, "token_type": "bearer"}


@router.get("/google/login")
def google_login():
    url = google_oauth.get_google_auth_url(create_state_token())
    return RedirectResponse(url, status_code=302)


@router.get("/google/callback", response_model=Token)
async def google_callback(
    code: str,
    state: str,
    session: Session = Depends(get_session),
):
    if not verify_state_token(state):
        raise HTTPException(status_code=400, detail="Invalid OAuth state")

    try:
        tokens = await google_oauth.exchange_google_code(code)
        profile = await google_oauth.get_google_user_info(tokens["access_token"])
    except (httpx.HTTPError, KeyError) as e:
        logger.warning("Google sign-in failed: %s", e)
        raise HTTPException(status_code=502, detail="Google sign-in failed")

    if not profile.get("email") or not profile.get("sub"):
        raise HTTPException(status_code=502, detail="Google profile has no email")

    user = google_oauth.link_google_account(session, profile, tokens)
    token = issue_user_token(session, user)
    return {"access_token": token, "token_type": "bearer"}


@router.get("/session", response_model=SessionUser)
def read_session(
    session: Session = Depends(get_session),
    current_user: dict = Depends(get_current_user),
):
    user = session.get(User, current_user["id"])
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "image": user.image,
        "is_oauth": is_oauth_user(session, user),
    }
