# barbershop/schemas.py

from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from datetime import datetime, date, time
from typing import List, Optional


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class UserRole(str, Enum):
    user = "user"
    admin = "admin"


class BookingStatus(str, Enum):
    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


class UserPublic(BaseModel):
    id: int
    email: str
    name: Optional[str] = None
    image: Optional[str] = None
    role: UserRole


class UserCreate(BaseModel):
    email: str
    password: str = Field(min_length=8, max_length=72)
    name: Optional[str] = None


class SessionUser(BaseModel):
    id: int
    name: Optional[str] = None
    email: str
    role: UserRole
    image: Optional[str] = None
    is_oauth: bool = False


class SettingsUpdate(BaseModel):
    name: str = Field(min_length=1)
    image: Optional[str] = None


# services

class ServiceImageCreate(BaseModel):
    url: str
    name: Optional[str] = None
    size: Optional[int] = Field(default=None, ge=0)


class ServiceImagePublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    name: Optional[str] = None
    size: Optional[int] = None
    order: int


class ImageOrder(BaseModel):
    image_ids: List[int]


class ServiceCreate(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    price: float = Field(ge=0)
    duration: int = Field(gt=0)
    category: Optional[str] = None
    is_active: bool = True


class ServicePublic(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    duration: int
    category: Optional[str] = None
    is_active: bool
    average_rating: float
    total_ratings: int
    image: str
    images: List[ServiceImagePublic]


# schedule

class WorkingHoursUpdate(BaseModel):
    start_time: time
    end_time: time
    is_available: bool = True


class WorkingHoursPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day_of_week: str
    start_time: time
    end_time: time
    is_available: bool


class BlockedTimeCreate(BaseModel):
    date: date
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    is_all_day: bool = False
    reason: Optional[str] = None


class BlockedTimePublic(BlockedTimeCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int


# bookings

class BookingCreate(BaseModel):
    service_id: int
    appointment_date: date
    start_time: time
    end_time: Optional[time] = None
    status: Optional[BookingStatus] = None
    total_price: Optional[float] = Field(default=None, ge=0)
    notes: Optional[str] = None
    customer_id: Optional[int] = None  # admins booking for someone else


class BookingUpdate(BaseModel):
    service_id: int
    appointment_date: date
    start_time: time
    end_time: time
    status: BookingStatus
    total_price: float = Field(ge=0)
    notes: Optional[str] = None
    cancel_reason: Optional[str] = None


class BookingCancel(BaseModel):
    cancel_reason: Optional[str] = None


class BookingPublic(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    customer_id: int
    service_id: int
    appointment_date: date
    start_time: time
    end_time: time
    status: BookingStatus
    total_price: float
    notes: Optional[str] = None
    cancel_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# availability

class TimeSlot(BaseModel):
    time: str  # HH:MM
    available: bool
    reason: Optional[str] = None


class AvailabilityResponse(BaseModel):
    service_id: int
    date: date
    slots: List[TimeSlot]


class SlotCheckResponse(BaseModel):
    available: bool
    reason: Optional[str] = None


class Message(BaseModel):
    success: str
