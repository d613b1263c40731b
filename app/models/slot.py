import uuid
from sqlalchemy import (
    Column, String, Boolean, Date, Time, DateTime, Integer, BigInteger, ForeignKey, UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.db.session import Base

# SQLite only autoincrements INTEGER primary keys
BigId = BigInteger().with_variant(Integer, "sqlite")


class SlotTemplate(Base):
    __tablename__ = "slot_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(50), unique=True, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    position = Column(Integer, unique=True, nullable=False)  # ordering + adjacency key
    is_active = Column(Boolean, nullable=False, default=True)

    daily_slots = relationship("DailySlot", back_populates="template")


class DailySlot(Base):
    __tablename__ = "daily_slots"
    __table_args__ = (
        UniqueConstraint("slot_date", "position", name="uq_daily_slots_date_position"),
    )

    id = Column(BigId, primary_key=True, autoincrement=True)
    slot_date = Column(Date, nullable=False, index=True)
    template_id = Column(Integer, ForeignKey("slot_templates.id"), nullable=False)
    position = Column(Integer, nullable=False)
    start_at = Column(DateTime(timezone=True), nullable=False)  # UTC
    end_at = Column(DateTime(timezone=True), nullable=False)  # UTC
    is_enabled = Column(Boolean, nullable=False, default=True)

    template = relationship("SlotTemplate", back_populates="daily_slots")
    binding = relationship("ReservationSlot", back_populates="daily_slot", uselist=False)


class ReservationSlot(Base):
    __tablename__ = "reservation_slots"

    reservation_id = Column(UUID(as_uuid=True), ForeignKey("cinema_reservations.id"), primary_key=True)
    # unique: a daily slot can be bound to one reservation only
    daily_slot_id = Column(BigId, ForeignKey("daily_slots.id"), primary_key=True, unique=True)

    reservation = relationship("CinemaReservation", back_populates="slots")
    daily_slot = relationship("DailySlot", back_populates="binding")
