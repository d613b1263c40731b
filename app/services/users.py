from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.errors import UserNotFound
from app.models.user import User
from app.services.common import storage_guard


class UserDirectory:
    """Read-only access to residents, as the reservation core needs it."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, user_id: UUID) -> User:
        with storage_guard(self.db, "users.find_by_id"):
            user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise UserNotFound()
        return user

    def find_by_apartment_id(self, apartment_id: UUID) -> List[User]:
        with storage_guard(self.db, "users.find_by_apartment_id"):
            return self.db.query(User).filter(User.apartment_id == apartment_id).all()
