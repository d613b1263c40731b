import uuid
from sqlalchemy import Column, String, Boolean, DateTime, func, Integer, ForeignKey, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.db.session import Base

class CinemaReservation(Base):
    __tablename__ = "cinema_reservations"
    __table_args__ = (
        CheckConstraint("people_num > 0", name="ck_cinema_reservations_people_num"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id"), nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=False)
    people_num = Column(Integer, nullable=False)
    is_approved = Column(Boolean, nullable=False, default=False)
    phone_num = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    user = relationship("User", back_populates="reservations")
    slots = relationship("ReservationSlot", back_populates="reservation", cascade="all, delete-orphan")
