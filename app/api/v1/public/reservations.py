from uuid import UUID
from typing import List, Optional
from datetime import date, datetime

from fastapi import APIRouter, Depends, Query, Response, status

from app.api.deps import get_current_user, get_current_admin_user, get_reservation_service, get_slot_service
from app.core.errors import InvalidInput
from app.models.reservation import CinemaReservation
from app.models.user import Role, User
from app.schemas.common import DefaultResponse
from app.schemas.reservation import (
    ReservationCreate,
    ReservationCreated,
    CinemaReservation as ReservationSchema,
    TimeInterval,
    FreeIntervalsResponse,
)
from app.schemas.slot import DailySlot as DailySlotSchema, FreeSlotsResponse
from app.services.reservations import ReservationService, reservation_slot_positions
from app.services.slots import SlotService

router = APIRouter(prefix="/reservations", tags=["Reservations"])


def serialize_reservation(reservation: CinemaReservation) -> ReservationSchema:
    out = ReservationSchema.model_validate(reservation)
    out.positions = reservation_slot_positions(reservation)
    return out


# ---------------------------------------------------------------------------
# POST /reservations — book one or two adjacent slots
# ---------------------------------------------------------------------------


@router.post(
    "/",
    response_model=DefaultResponse[ReservationCreated],
    status_code=status.HTTP_201_CREATED,
)
def create_reservation(
    data: ReservationCreate,
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_user),
):
    """
    Reserve the cinema room.

    - `time_slots`: one position, or two adjacent positions (e.g. `[2, 3]`).
    - `people_num`: party size, at most 12.
    - Reservations by ADMIN / GOD are approved immediately; others wait for approval.
    - `reservations_left` reports the household's remaining free reservations.
    """
    reservation, remaining = service.make_reservation(
        user_id=current_user.id,
        slot_date=data.date,
        positions=data.time_slots,
        people_num=data.people_num,
        role=Role(current_user.role),
        contact_handle=current_user.username,
    )
    return DefaultResponse(data=ReservationCreated(
        reservation_id=reservation.id,
        is_approved=reservation.is_approved,
        reservations_left=remaining,
    ))


# ---------------------------------------------------------------------------
# GET /reservations — reservations visible to the current user
# ---------------------------------------------------------------------------


@router.get("/", response_model=DefaultResponse[List[ReservationSchema]])
def list_reservations(
    date: Optional[date] = Query(None, description="Single day (YYYY-MM-DD)"),
    date_from: Optional[date] = Query(None, alias="from", description="First day (YYYY-MM-DD)"),
    date_to: Optional[date] = Query(None, alias="to", description="Last day (YYYY-MM-DD)"),
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_user),
):
    """
    Return reservations between `from` 00:00:00 and `to` 23:59:59 UTC.
    Pass `date` instead to look at a single day.
    Admins see everyone's reservations, residents only their own.
    """
    if date:
        date_from = date_to = date
    if not date_from or not date_to:
        raise InvalidInput("either 'date' or both 'from' and 'to' are required")
    if date_to < date_from:
        raise InvalidInput("'to' must not be before 'from'")

    reservations = service.get_user_reservations(current_user.id, date_from, date_to)
    return DefaultResponse(data=[serialize_reservation(r) for r in reservations])


# ---------------------------------------------------------------------------
# PATCH /reservations/approve — admin approval
# ---------------------------------------------------------------------------


@router.patch("/approve", status_code=status.HTTP_204_NO_CONTENT)
def approve_reservation(
    reservation_id: UUID = Query(...),
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_admin_user),
):
    """Approve a reservation. Approving an approved reservation is a no-op."""
    service.approve_reservation(reservation_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# GET /reservations/free-slots — positions still open on a date
# ---------------------------------------------------------------------------


@router.get("/free-slots", response_model=DefaultResponse[FreeSlotsResponse])
def get_free_slots(
    date: date = Query(..., description="Day to inspect (YYYY-MM-DD)"),
    slots: SlotService = Depends(get_slot_service),
    current_user: User = Depends(get_current_user),
):
    """
    Free daily slots of a date plus the adjacent free pairs that can be
    booked as a double session. Slots for the date are created on first use.
    """
    free, pairs = slots.get_free_slots(date)
    return DefaultResponse(data=FreeSlotsResponse(
        free_slots=[DailySlotSchema.model_validate(s) for s in free],
        free_pairs=pairs,
    ))


# ---------------------------------------------------------------------------
# GET /reservations/free-intervals — continuous free time in a window
# ---------------------------------------------------------------------------


@router.get("/free-intervals", response_model=DefaultResponse[FreeIntervalsResponse])
def get_free_intervals(
    window_from: datetime = Query(..., alias="from", description="Window start (RFC3339)"),
    window_to: datetime = Query(..., alias="to", description="Window end, exclusive (RFC3339)"),
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_user),
):
    """Merged busy blocks and the free gaps between them inside `[from, to)`."""
    busy, free = service.get_free_intervals(window_from, window_to)
    return DefaultResponse(data=FreeIntervalsResponse(
        busy=[TimeInterval(start=s, end=e) for s, e in busy],
        free=[TimeInterval(start=s, end=e) for s, e in free],
    ))
