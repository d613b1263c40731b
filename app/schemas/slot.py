from typing import List, Tuple
from pydantic import BaseModel, field_validator
from datetime import date, time, datetime

from app.utils.timeslots import as_utc


# Slot template — admin catalog view
class SlotTemplate(BaseModel):
    id: int
    code: str
    start_time: time
    end_time: time
    position: int
    is_active: bool

    class Config:
        from_attributes = True


# Daily slot — one materialized template on one date
class DailySlot(BaseModel):
    id: int
    slot_date: date
    template_id: int
    position: int
    start_at: datetime
    end_at: datetime
    is_enabled: bool

    @field_validator("start_at", "end_at")
    @classmethod
    def normalize_utc(cls, v: datetime) -> datetime:
        return as_utc(v)

    class Config:
        from_attributes = True


# Daily slot — Update (admin PATCH /admin/daily-slots/{id}); nothing else may change
class DailySlotUpdate(BaseModel):
    is_enabled: bool


# Response for GET /reservations/free-slots
class FreeSlotsResponse(BaseModel):
    free_slots: List[DailySlot]
    free_pairs: List[Tuple[int, int]]
