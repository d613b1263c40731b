"""
Daily slot materialization and free-slot calculation.

A day's slots are materialized lazily from the active templates the first
time the day is asked for. Materialization is an insert that ignores
(slot_date, position) conflicts, so repeated and concurrent calls are safe.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import DailySlotNotFound, UnexpectedStorage
from app.core.tracing import Tracer
from app.models.slot import SlotTemplate, DailySlot, ReservationSlot
from app.services.common import storage_guard
from app.utils.timeslots import resolve_timezone, slot_window

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class SlotService:
    def __init__(self, db: Session, tracer: Tracer, tz: Optional[ZoneInfo] = None):
        self.db = db
        self.tracer = tracer
        self.tz = tz or resolve_timezone(settings.CINEMA_TIMEZONE)

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def list_templates(self) -> List[SlotTemplate]:
        with storage_guard(self.db, "slots.list_templates"):
            return self.db.query(SlotTemplate).order_by(SlotTemplate.position).all()

    def get_active_templates(self) -> List[SlotTemplate]:
        with storage_guard(self.db, "slots.get_active_templates"):
            return (
                self.db.query(SlotTemplate)
                .filter(SlotTemplate.is_active == True)  # noqa: E712
                .order_by(SlotTemplate.position)
                .all()
            )

    # ------------------------------------------------------------------
    # Materializer
    # ------------------------------------------------------------------

    def ensure_daily_slots(self, slot_date: date, tz: Optional[ZoneInfo] = None) -> int:
        """
        Make sure every active template has a DailySlot on ``slot_date``.

        Returns how many rows were inserted by this call.
        """
        tz = tz or self.tz
        with self.tracer.span("ensure_daily_slots"):
            templates = self.get_active_templates()
            if not templates:
                return 0

            rows = []
            for template in templates:
                start_at, end_at = slot_window(slot_date, template.start_time, template.end_time, tz)
                rows.append({
                    "slot_date": slot_date,
                    "template_id": template.id,
                    "position": template.position,
                    "start_at": start_at,
                    "end_at": end_at,
                    "is_enabled": True,
                })

            dialect = self.db.get_bind().dialect.name
            insert = _UPSERT_INSERTS.get(dialect)
            if insert is None:
                raise UnexpectedStorage(f"slot materialization is not supported on '{dialect}'")

            stmt = insert(DailySlot).values(rows).on_conflict_do_nothing(
                index_elements=["slot_date", "position"]
            )
            with storage_guard(self.db, "slots.ensure_daily_slots"):
                result = self.db.execute(stmt)
                self.db.commit()

            created = max(result.rowcount or 0, 0)
            if created:
                logger.info("Materialized %d daily slot(s) for %s.", created, slot_date)
            return created

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_daily_slots(self, slot_date: date) -> List[DailySlot]:
        with storage_guard(self.db, "slots.get_daily_slots"):
            return (
                self.db.query(DailySlot)
                .filter(DailySlot.slot_date == slot_date)
                .order_by(DailySlot.position)
                .all()
            )

    def get_daily_slots_by_positions(
        self, slot_date: date, positions: Sequence[int]
    ) -> Dict[int, DailySlot]:
        with storage_guard(self.db, "slots.get_daily_slots_by_positions"):
            slots = (
                self.db.query(DailySlot)
                .filter(DailySlot.slot_date == slot_date, DailySlot.position.in_(list(positions)))
                .all()
            )
        return {s.position: s for s in slots}

    def get_daily_slot_ids_by_positions(self, slot_date: date, positions: Sequence[int]) -> Dict[int, int]:
        return {p: s.id for p, s in self.get_daily_slots_by_positions(slot_date, positions).items()}

    def get_free_daily_slots(self, slot_date: date, tz: Optional[ZoneInfo] = None) -> List[DailySlot]:
        """Enabled slots of the day with no reservation bound to them."""
        self.ensure_daily_slots(slot_date, tz)
        with self.tracer.span("get_free_daily_slots"), storage_guard(self.db, "slots.get_free_daily_slots"):
            return (
                self.db.query(DailySlot)
                .outerjoin(ReservationSlot, ReservationSlot.daily_slot_id == DailySlot.id)
                .filter(
                    DailySlot.slot_date == slot_date,
                    DailySlot.is_enabled == True,  # noqa: E712
                    ReservationSlot.daily_slot_id == None,  # noqa: E711
                )
                .order_by(DailySlot.position)
                .all()
            )

    @staticmethod
    def get_free_slot_pairs(free_slots: Iterable[DailySlot]) -> List[Tuple[int, int]]:
        """Adjacent (p, p + 1) position pairs where both positions are free."""
        free_positions = sorted({s.position for s in free_slots})
        taken = set(free_positions)
        return [(p, p + 1) for p in free_positions if p + 1 in taken]

    def get_free_slots(self, slot_date: date) -> Tuple[List[DailySlot], List[Tuple[int, int]]]:
        free = self.get_free_daily_slots(slot_date)
        return free, self.get_free_slot_pairs(free)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def set_daily_slot_enabled(self, slot_id: int, enabled: bool) -> DailySlot:
        with storage_guard(self.db, "slots.set_daily_slot_enabled"):
            slot = self.db.query(DailySlot).filter(DailySlot.id == slot_id).first()
            if not slot:
                raise DailySlotNotFound()
            if slot.is_enabled != enabled:
                slot.is_enabled = enabled
                self.db.commit()
                self.db.refresh(slot)
                logger.info("Daily slot %s %s.", slot_id, "enabled" if enabled else "disabled")
        return slot
