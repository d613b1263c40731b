import uuid
from sqlalchemy import Column, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.db.session import Base

class Apartment(Base):
    __tablename__ = "apartments"
    __table_args__ = (
        UniqueConstraint("floor", "door_number", name="uq_apartments_floor_door"),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    floor = Column(Integer, nullable=False)
    door_number = Column(Integer, nullable=False)

    # Users bound to this apartment share the household reservation allowance
    residents = relationship("User", back_populates="apartment")
