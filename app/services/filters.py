from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.orm import Query

from app.models.reservation import CinemaReservation


@dataclass
class ReservationFilter:
    """
    Query specification for ``cinema_reservations``.

    Each field narrows the result only when it is set; unset fields add no
    clause at all.
    """

    start_time_from: Optional[datetime] = None
    start_time_to: Optional[datetime] = None
    end_time_from: Optional[datetime] = None
    end_time_to: Optional[datetime] = None
    user_id: Optional[UUID] = None
    user_ids: Optional[Sequence[UUID]] = None
    people_num_from: Optional[int] = None
    people_num_to: Optional[int] = None
    is_approved: Optional[bool] = None

    def apply(self, query: Query) -> Query:
        if self.start_time_from is not None:
            query = query.filter(CinemaReservation.start_time >= self.start_time_from)
        if self.start_time_to is not None:
            query = query.filter(CinemaReservation.start_time <= self.start_time_to)
        if self.end_time_from is not None:
            query = query.filter(CinemaReservation.end_time >= self.end_time_from)
        if self.end_time_to is not None:
            query = query.filter(CinemaReservation.end_time <= self.end_time_to)
        if self.user_id is not None:
            query = query.filter(CinemaReservation.user_id == self.user_id)
        if self.user_ids:
            query = query.filter(CinemaReservation.user_id.in_(list(self.user_ids)))
        if self.people_num_from is not None:
            query = query.filter(CinemaReservation.people_num >= self.people_num_from)
        if self.people_num_to is not None:
            query = query.filter(CinemaReservation.people_num <= self.people_num_to)
        if self.is_approved is not None:
            query = query.filter(CinemaReservation.is_approved == self.is_approved)
        return query
