from app.models.apartment import Apartment
from app.models.user import User, Role
from app.models.slot import SlotTemplate, DailySlot, ReservationSlot
from app.models.reservation import CinemaReservation
