# barbershop/auth.py

import secrets
from typing import Optional
from datetime import datetime, timedelta, timezone
from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
from passlib.context import CryptContext


from sqlmodel import Session, select
from barbershop.config import settings
from barbershop.db import get_session
from barbershop.models import Account, User

STATE_EXPIRE_MINUTES = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    if expires_minutes is None:
        expires_minutes = settings.access_token_expire_minutes
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes)
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def is_oauth_user(session: Session, user: User) -> bool:
    account = session.exec(
        select(Account).where(Account.user_id == user.id)
    ).first()
    return account is not None


def issue_user_token(session: Session, user: User) -> str:
    """Sign a token whose claims mirror the user's current database row."""
    return create_access_token({
        "sub": str(user.id),
        "name": user.name,
        "email": user.email,
        "role": user.role,
        "image": user.image,
        "is_oauth": is_oauth_user(session, user),
        "is_two_factor_enabled": user.two_factor_enabled,
    })


def create_state_token() -> str:
    return create_access_token(
        {"nonce": secrets.token_urlsafe(16), "purpose": "oauth_state"},
        expires_minutes=STATE_EXPIRE_MINUTES,
    )


def verify_state_token(state: str) -> bool:
    try:
        payload = jwt.decode(state, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return False
    return payload.get("purpose") == "oauth_state"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def get_current_user(
    token: str = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> dict:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
        user_id = payload.get("sub")
        if user_id is None or not str(user_id).isdigit():
            raise HTTPException(
                status_code=401,
                detail="Invalid token",
                headers={"WWW-Authenticate": "Bearer"},
            )
    except JWTError:
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = session.get(User, int(user_id))

    if user is None:
        raise HTTPException(
            status_code=401,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return {
        "id": user.id,
        "email": user.email,
        "name": user.name,
        "image": user.image,
        "role": user.role,
    }
