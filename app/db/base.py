from app.db.session import Base
from app.models.apartment import Apartment
from app.models.user import User
from app.models.slot import SlotTemplate, DailySlot, ReservationSlot
from app.models.reservation import CinemaReservation
