from app.schemas.common import DefaultResponse, ErrorResponse
from app.schemas.slot import SlotTemplate, DailySlot, DailySlotUpdate, FreeSlotsResponse
from app.schemas.reservation import (
    ReservationCreate, ReservationCreated, CinemaReservation,
    TimeInterval, FreeIntervalsResponse,
)
