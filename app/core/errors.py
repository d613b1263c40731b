"""
Application error taxonomy.

Every error raised by the service layer is an ``AppError`` carrying the HTTP
status the delivery layer should answer with. ``app.main`` renders them as
``{"status": "error", "error_message": ...}``.
"""

from typing import Optional


class AppError(Exception):
    status_code: int = 500
    message: str = "internal error"

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None):
        self.message = message or self.message
        self.cause = cause
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.cause is not None:
            return f"{self.message}: {self.cause}"
        return self.message


class InvalidInput(AppError):
    status_code = 400
    message = "invalid input"


class TooManyPeople(AppError):
    status_code = 400
    message = "too many people for one reservation"


class ReservationImpossible(AppError):
    status_code = 400
    message = "requested window is too long"


class CinemaBusy(AppError):
    status_code = 409
    message = "cinema is already booked for this time"


class ReservationNotFound(AppError):
    status_code = 404
    message = "reservation not found"


class UserNotFound(AppError):
    status_code = 404
    message = "user not found"


class DailySlotNotFound(AppError):
    status_code = 404
    message = "daily slot not found"


class UnexpectedStorage(AppError):
    status_code = 500
    message = "unexpected db error"
