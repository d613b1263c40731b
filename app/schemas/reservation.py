from typing import List, Optional
from pydantic import BaseModel, Field, UUID4, field_validator
from datetime import date, datetime

from app.utils.timeslots import as_utc


# Reservation — Create (POST /reservations)
class ReservationCreate(BaseModel):
    time_slots: List[int]
    people_num: int = Field(ge=1)
    date: date


# Reservation — Create response
class ReservationCreated(BaseModel):
    reservation_id: UUID4
    is_approved: bool
    reservations_left: int


# Reservation — DB response
class CinemaReservation(BaseModel):
    id: UUID4
    user_id: UUID4
    start_time: datetime
    end_time: datetime
    people_num: int
    is_approved: bool
    phone_num: Optional[str] = None
    positions: List[int] = []

    @field_validator("start_time", "end_time")
    @classmethod
    def normalize_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    class Config:
        from_attributes = True


class TimeInterval(BaseModel):
    start: datetime
    end: datetime


# Response for GET /reservations/free-intervals
class FreeIntervalsResponse(BaseModel):
    busy: List[TimeInterval]
    free: List[TimeInterval]
