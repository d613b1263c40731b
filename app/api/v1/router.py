from fastapi import APIRouter

# Public — reservations, free slots
from app.api.v1.public.reservations import router as reservations_router

# Admin
from app.api.v1.admin.reservations import router as admin_reservations_router
from app.api.v1.admin.slots import template_router, daily_slot_router

api_router = APIRouter()

# --- Public: reservations ---
api_router.include_router(reservations_router)

# --- Admin ---
api_router.include_router(admin_reservations_router)
api_router.include_router(template_router)
api_router.include_router(daily_slot_router)
