# barbershop/models.py

from typing import Optional, List
from datetime import datetime, date as Date, time, timezone

from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field, Relationship


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    email: str = Field(index=True, unique=True)
    name: Optional[str] = None
    image: Optional[str] = None
    role: str = "user"  # user or admin
    password_hash: Optional[str] = None  # None for OAuth-only users
    email_verified: Optional[datetime] = None
    two_factor_enabled: bool = False

    accounts: List["Account"] = Relationship(back_populates="user")


class Account(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("provider", "provider_account_id", name="uq_provider_account"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    type: str = "oauth"
    provider: str
    provider_account_id: str
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    token_type: Optional[str] = None
    scope: Optional[str] = None
    id_token: Optional[str] = None

    user: Optional[User] = Relationship(back_populates="accounts")


class Service(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    description: Optional[str] = None
    price: float
    duration: int  # minutes
    category: Optional[str] = Field(default=None, index=True)
    is_active: bool = True
    average_rating: float = 0
    total_ratings: int = 0
    created_at: datetime = Field(default_factory=utcnow)

    images: List["ServiceImage"] = Relationship(
        back_populates="service",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )


class ServiceImage(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    service_id: int = Field(foreign_key="service.id", index=True)
    url: str
    name: Optional[str] = None
    size: Optional[int] = None  # bytes
    order: int = 0

    service: Optional[Service] = Relationship(back_populates="images")


class WorkingHours(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    day_of_week: str = Field(index=True, unique=True)  # monday ... sunday
    start_time: time
    end_time: time
    is_available: bool = True


class BlockedTime(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    date: Date = Field(index=True)
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    is_all_day: bool = False
    reason: Optional[str] = None


class Booking(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    customer_id: int = Field(foreign_key="user.id", index=True)
    service_id: int = Field(foreign_key="service.id", index=True)
    appointment_date: Date = Field(index=True)
    start_time: time
    end_time: time
    status: str = "pending"
    total_price: float
    notes: Optional[str] = None
    cancel_reason: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
