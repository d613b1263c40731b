from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


# Success envelope — used by all reservation endpoints
class DefaultResponse(BaseModel, Generic[T]):
    status: str = "success"
    data: Optional[T] = None


# Error envelope — rendered by the exception handlers in app.main
class ErrorResponse(BaseModel):
    status: str = "error"
    error_message: str
