from typing import List
from datetime import date

from fastapi import APIRouter, Depends, Query

from app.api.deps import get_current_admin_user, get_slot_service
from app.models.user import User
from app.schemas.common import DefaultResponse
from app.schemas.slot import (
    SlotTemplate as SlotTemplateSchema,
    DailySlot as DailySlotSchema,
    DailySlotUpdate,
)
from app.services.slots import SlotService

template_router = APIRouter(prefix="/admin/slot-templates", tags=["Admin - Slots"])
daily_slot_router = APIRouter(prefix="/admin/daily-slots", tags=["Admin - Slots"])


@template_router.get("/", response_model=DefaultResponse[List[SlotTemplateSchema]])
def list_slot_templates(
    slots: SlotService = Depends(get_slot_service),
    current_user: User = Depends(get_current_admin_user),
):
    """All slot templates, active or not, by position."""
    return DefaultResponse(data=[SlotTemplateSchema.model_validate(t) for t in slots.list_templates()])


@daily_slot_router.get("/", response_model=DefaultResponse[List[DailySlotSchema]])
def list_daily_slots(
    date: date = Query(..., description="Day to inspect (YYYY-MM-DD)"),
    slots: SlotService = Depends(get_slot_service),
    current_user: User = Depends(get_current_admin_user),
):
    """Every daily slot of a date, booked or not. Slots are created on first use."""
    slots.ensure_daily_slots(date)
    return DefaultResponse(data=[DailySlotSchema.model_validate(s) for s in slots.get_daily_slots(date)])


@daily_slot_router.patch("/{slot_id}", response_model=DefaultResponse[DailySlotSchema])
def update_daily_slot(
    slot_id: int,
    data: DailySlotUpdate,
    slots: SlotService = Depends(get_slot_service),
    current_user: User = Depends(get_current_admin_user),
):
    """
    Enable or disable a single daily slot (e.g. maintenance in the cinema room).
    Disabled slots are hidden from free slots and cannot be reserved.
    Existing reservations on the slot are left untouched.
    """
    slot = slots.set_daily_slot_enabled(slot_id, data.is_enabled)
    return DefaultResponse(data=DailySlotSchema.model_validate(slot))
