"""
Cinema room reservations.

Reservations occupy one or two adjacent daily slots. The only guard against
double booking is the unique ``reservation_slots.daily_slot_id`` constraint:
two requests racing for the same slot both try to commit, the database lets
one through, and the other gets CinemaBusy.
"""

import logging
import re
import uuid
from datetime import date, datetime, timedelta
from typing import List, Sequence, Tuple
from uuid import UUID

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.core.config import settings
from app.core.errors import (
    CinemaBusy,
    InvalidInput,
    ReservationImpossible,
    ReservationNotFound,
    TooManyPeople,
    UnexpectedStorage,
)
from app.core.tracing import Tracer
from app.models.reservation import CinemaReservation
from app.models.slot import ReservationSlot
from app.models.user import Role, User
from app.services.common import is_unique_violation, storage_guard
from app.services.filters import ReservationFilter
from app.services.slots import SlotService
from app.services.users import UserDirectory
from app.utils.intervals import Interval, busy_intervals, free_intervals
from app.utils.timeslots import as_utc, day_bounds_utc

logger = logging.getLogger(__name__)

PHONE_NUM_RE = re.compile(r"^\+\d{11}$")


class ReservationService:
    def __init__(
        self,
        db: Session,
        slots: SlotService,
        users: UserDirectory,
        tracer: Tracer,
    ):
        self.db = db
        self.slots = slots
        self.users = users
        self.tracer = tracer

    # ------------------------------------------------------------------
    # Allocation
    # ------------------------------------------------------------------

    def make_reservation(
        self,
        user_id: UUID,
        slot_date: date,
        positions: Sequence[int],
        people_num: int,
        role: Role,
        contact_handle: str = "",
    ) -> Tuple[CinemaReservation, int]:
        """
        Book one slot, or two adjacent slots, of ``slot_date``.

        Returns the created reservation and the household's remaining free
        reservations for the booked window. The remaining count is advisory:
        it is reported, never used to refuse a booking.
        """
        with self.tracer.span("make_reservation"):
            if people_num > settings.MAX_PEOPLE_PER_RESERVATION:
                raise TooManyPeople(
                    f"at most {settings.MAX_PEOPLE_PER_RESERVATION} people per reservation"
                )
            if people_num < 1:
                raise InvalidInput("people_num must be positive")
            if len(positions) not in (1, 2):
                raise InvalidInput("one or two time slots must be requested")

            positions = sorted(positions)
            if len(positions) == 2 and positions[1] != positions[0] + 1:
                raise InvalidInput("two time slots must be adjacent")

            self.slots.ensure_daily_slots(slot_date)
            by_position = self.slots.get_daily_slots_by_positions(slot_date, positions)

            daily_slots = []
            for position in positions:
                slot = by_position.get(position)
                if slot is None or not slot.is_enabled:
                    raise InvalidInput(f"time slot {position} is not available on {slot_date}")
                daily_slots.append(slot)

            start = as_utc(daily_slots[0].start_at)
            end = as_utc(daily_slots[-1].end_at)

            user = self.users.find_by_id(user_id)
            remaining = self._remaining_quota(user, start, end)

            reservation = CinemaReservation(
                id=uuid.uuid4(),
                user_id=user_id,
                start_time=start,
                end_time=end,
                people_num=people_num,
                is_approved=role.is_privileged,
                phone_num=contact_handle if PHONE_NUM_RE.match(contact_handle or "") else None,
            )
            self._create_with_slots(reservation, [s.id for s in daily_slots])

            logger.info(
                "Reservation %s created for user %s on %s, positions %s.",
                reservation.id, user_id, slot_date, positions,
            )
            return reservation, remaining

    def _remaining_quota(self, user: User, start: datetime, end: datetime) -> int:
        if user.apartment_id is None:
            household = [user]
        else:
            household = self.users.find_by_apartment_id(user.apartment_id)

        flt = ReservationFilter(
            start_time_from=start,
            end_time_to=end,
            user_ids=[u.id for u in household],
        )
        with storage_guard(self.db, "reservations.remaining_quota"):
            used = flt.apply(self.db.query(CinemaReservation)).count()
        return settings.HOUSEHOLD_FREE_RESERVATIONS - used

    def _create_with_slots(self, reservation: CinemaReservation, daily_slot_ids: List[int]) -> None:
        """Insert the reservation and its slot bindings in one transaction."""
        try:
            self.db.add(reservation)
            self.db.flush()
            self.db.add_all([
                ReservationSlot(reservation_id=reservation.id, daily_slot_id=slot_id)
                for slot_id in daily_slot_ids
            ])
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if is_unique_violation(exc):
                raise CinemaBusy(cause=exc) from exc
            logger.error("Reservation insert failed: %s", exc)
            raise UnexpectedStorage(cause=exc) from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Reservation insert failed: %s", exc)
            raise UnexpectedStorage(cause=exc) from exc

    # ------------------------------------------------------------------
    # Approval
    # ------------------------------------------------------------------

    def approve_reservation(self, reservation_id: UUID) -> CinemaReservation:
        with self.tracer.span("approve_reservation"), storage_guard(self.db, "reservations.approve"):
            reservation = (
                self.db.query(CinemaReservation)
                .filter(CinemaReservation.id == reservation_id)
                .first()
            )
            if not reservation:
                raise ReservationNotFound()
            if reservation.is_approved:
                return reservation

            reservation.is_approved = True
            self.db.commit()
            self.db.refresh(reservation)

        logger.info("Reservation %s approved.", reservation_id)
        return reservation

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_unfiltered_reservations(self, flt: ReservationFilter) -> List[CinemaReservation]:
        with self.tracer.span("get_unfiltered_reservations"), storage_guard(self.db, "reservations.list"):
            return (
                flt.apply(self.db.query(CinemaReservation))
                .options(selectinload(CinemaReservation.slots).selectinload(ReservationSlot.daily_slot))
                .order_by(CinemaReservation.start_time)
                .all()
            )

    def get_user_reservations(self, user_id: UUID, start: date, end: date) -> List[CinemaReservation]:
        """
        Reservations between ``start`` 00:00:00 and ``end`` 23:59:59 UTC.

        Everything in the window is fetched first; ADMIN and GOD keep all of
        it, anyone else only their own reservations.
        """
        start_at, end_at = day_bounds_utc(start, end)
        user = self.users.find_by_id(user_id)
        reservations = self.get_unfiltered_reservations(
            ReservationFilter(start_time_from=start_at, end_time_to=end_at)
        )
        return self.filter_for_user(reservations, user)

    @staticmethod
    def filter_for_user(reservations: List[CinemaReservation], user: User) -> List[CinemaReservation]:
        if Role(user.role).is_privileged:
            return reservations
        return [r for r in reservations if r.user_id == user.id]

    def get_free_intervals(
        self, window_from: datetime, window_to: datetime
    ) -> Tuple[List[Interval], List[Interval]]:
        """
        Busy and free time inside ``[window_from, window_to)``.

        Busy blocks are the merged reservation windows clamped to the query
        window; free blocks are their complement.
        """
        window = (as_utc(window_from), as_utc(window_to))
        if window[1] <= window[0]:
            raise InvalidInput("'to' must be after 'from'")
        if window[1] - window[0] > timedelta(hours=settings.MAX_FREE_INTERVAL_WINDOW_HOURS):
            raise ReservationImpossible(
                f"window must not exceed {settings.MAX_FREE_INTERVAL_WINDOW_HOURS} hours"
            )

        with self.tracer.span("get_free_intervals"), storage_guard(self.db, "reservations.free_intervals"):
            rows = (
                self.db.query(CinemaReservation)
                .filter(
                    CinemaReservation.start_time < window[1],
                    CinemaReservation.end_time > window[0],
                )
                .all()
            )

        reserved = [(as_utc(r.start_time), as_utc(r.end_time)) for r in rows]
        return busy_intervals(window, reserved), free_intervals(window, reserved)


def reservation_slot_positions(reservation: CinemaReservation) -> List[int]:
    return sorted(binding.daily_slot.position for binding in reservation.slots)
