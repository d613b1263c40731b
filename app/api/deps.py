from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.security import decode_token
from app.core.tracing import build_tracer
from app.db.session import get_db
from app.models.user import Role, User
from app.services.reservations import ReservationService
from app.services.slots import SlotService
from app.services.users import UserDirectory

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise unauthorized

    subject = decode_token(credentials.credentials)
    if not subject:
        raise unauthorized
    try:
        user_id = UUID(subject)
    except ValueError:
        raise unauthorized

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise unauthorized
    return user


def get_current_admin_user(current_user: User = Depends(get_current_user)) -> User:
    if not Role(current_user.role).is_privileged:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user


def get_slot_service(db: Session = Depends(get_db)) -> SlotService:
    return SlotService(db, build_tracer("slots"))


def get_reservation_service(
    db: Session = Depends(get_db),
    slots: SlotService = Depends(get_slot_service),
) -> ReservationService:
    return ReservationService(db, slots, UserDirectory(db), build_tracer("reservations"))
