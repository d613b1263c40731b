import uuid
import enum
from sqlalchemy import Column, String, Boolean, DateTime, func, ForeignKey, Enum as SAEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.db.session import Base

class Role(str, enum.Enum):
    GUEST = "GUEST"
    USER = "USER"
    ADMIN = "ADMIN"
    GOD = "GOD"

    @property
    def is_privileged(self) -> bool:
        return self in (Role.ADMIN, Role.GOD)


class User(Base):
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    username = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False, default="")
    last_name = Column(String(100), nullable=False, default="")
    apartment_id = Column(UUID(as_uuid=True), ForeignKey("apartments.id"), nullable=True, index=True)
    role = Column(SAEnum(Role, native_enum=False), nullable=False, default=Role.GUEST)
    is_approved = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    apartment = relationship("Apartment", back_populates="residents")
    reservations = relationship("CinemaReservation", back_populates="user")
