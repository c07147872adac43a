# barbershop/services/google_oauth.py

"""Google sign-in: authorization URL, code exchange and account linking."""

import logging
import time
from typing import Any, Optional
from urllib.parse import urlencode

import httpx
from fastapi import HTTPException
from sqlmodel import Session, select

from barbershop.config import settings
from barbershop.models import Account, User, utcnow

logger = logging.getLogger(__name__)

PROVIDER = "google"
GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
GOOGLE_SCOPES = ["openid", "email", "profile"]


def get_google_auth_url(state: str) -> str:
    """Generate the Google consent screen URL."""
    params = {
        "client_id": settings.google_client_id,
        "redirect_uri": settings.google_redirect_uri,
        "response_type": "code",
        "scope": " ".join(GOOGLE_SCOPES),
        "access_type": "offline",
        "prompt": "consent",
        "state": state,
    }
    return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"


async def exchange_google_code(code: str) -> dict[str, Any]:
    """Exchange authorization code for tokens."""
    async with httpx.AsyncClient() as client:
        response = await client.post(
            GOOGLE_TOKEN_URL,
            data={
                "client_id": settings.google_client_id,
                "client_secret": settings.google_client_secret,
                "code": code,
                "grant_type": "authorization_code",
                "redirect_uri": settings.google_redirect_uri,
            },
        )
        response.raise_for_status()
        return response.json()


async def get_google_user_info(access_token: str) -> dict[str, Any]:
    """Get the OpenID profile (sub, email, name, picture)."""
    async with httpx.AsyncClient() as client:
        response = await client.get(
            GOOGLE_USERINFO_URL,
            headers={"Authorization": f"Bearer {access_token}"},
        )
        response.raise_for_status()
        return response.json()


def _expires_at(tokens: dict[str, Any]) -> Optional[int]:
    expires_in = tokens.get("expires_in")
    if expires_in is None:
        return None
    return int(time.time()) + int(expires_in)


def _can_link_by_email(user: User, profile: dict[str, Any]) -> bool:
    # Google must vouch for the address; password accounts must have verified it too
    if not profile.get("email_verified"):
        return False
    return user.email_verified is not None or user.password_hash is None


def link_google_account(
    session: Session,
    profile: dict[str, Any],
    tokens: dict[str, Any],
) -> User:
    """Return the user for a Google profile, creating and linking as needed.

    Lookup order: an existing linked account, then a user with the same
    email, then a brand-new user. Linking by email needs a Google-verified
    address and, for password users, an address they verified themselves;
    otherwise it is refused with 409. Stored provider tokens are refreshed
    on every sign-in.
    """
    provider_account_id = str(profile["sub"])
    email = profile["email"]

    account = session.exec(
        select(Account)
        .where(Account.provider == PROVIDER)
        .where(Account.provider_account_id == provider_account_id)
    ).first()

    if account is not None:
        user = session.get(User, account.user_id)
    else:
        user = session.exec(select(User).where(User.email == email)).first()
        if user is not None and not _can_link_by_email(user, profile):
            logger.warning("Refused Google link for user %s: email ownership not proven", user.id)
            raise HTTPException(
                status_code=409,
                detail="An account with this email already exists. Sign in with your password instead.",
            )
        if user is None:
            user = User(
                email=email,
                name=profile.get("name"),
                image=profile.get("picture"),
            )
            session.add(user)
            session.flush()  # fills user.id
            logger.info("Created user %s from Google sign-in", user.id)

        account = Account(
            user_id=user.id,
            provider=PROVIDER,
            provider_account_id=provider_account_id,
        )
        logger.info("Linked Google account to user %s", user.id)

    if profile.get("email_verified") and user.email_verified is None:
        user.email_verified = utcnow()
        session.add(user)

    account.access_token = tokens.get("access_token")
    account.refresh_token = tokens.get("refresh_token") or account.refresh_token
    account.expires_at = _expires_at(tokens)
    account.token_type = tokens.get("token_type")
    account.scope = tokens.get("scope")
    account.id_token = tokens.get("id_token")
    session.add(account)

    session.commit()
    session.refresh(user)
    return user
