from uuid import UUID
from typing import List, Optional
from datetime import datetime

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_current_admin_user, get_reservation_service
from app.api.v1.public.reservations import serialize_reservation
from app.models.user import User
from app.schemas.common import DefaultResponse
from app.schemas.reservation import CinemaReservation as ReservationSchema
from app.services.filters import ReservationFilter
from app.services.reservations import ReservationService

router = APIRouter(prefix="/admin/reservations", tags=["Admin - Reservations"])


@router.get("/", response_model=DefaultResponse[List[ReservationSchema]])
def list_all_reservations(
    start_time_from: Optional[datetime] = Query(None),
    start_time_to: Optional[datetime] = Query(None),
    end_time_from: Optional[datetime] = Query(None),
    end_time_to: Optional[datetime] = Query(None),
    user_id: Optional[UUID] = Query(None),
    people_num_from: Optional[int] = Query(None, ge=1),
    people_num_to: Optional[int] = Query(None, ge=1),
    is_approved: Optional[bool] = Query(None, description="Only approved / only pending"),
    service: ReservationService = Depends(get_reservation_service),
    current_user: User = Depends(get_current_admin_user),
):
    """
    Every reservation matching the given filters, ordered by start time.
    Omitted filters are not applied.
    """
    reservations = service.get_unfiltered_reservations(ReservationFilter(
        start_time_from=start_time_from,
        start_time_to=start_time_to,
        end_time_from=end_time_from,
        end_time_to=end_time_to,
        user_id=user_id,
        people_num_from=people_num_from,
        people_num_to=people_num_to,
        is_approved=is_approved,
    ))
    return DefaultResponse(data=[serialize_reservation(r) for r in reservations])
