import logging
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import UnexpectedStorage

logger = logging.getLogger(__name__)


@contextmanager
def storage_guard(db: Session, operation: str):
    """Roll back and re-raise any storage failure as UnexpectedStorage."""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("%s failed: %s", operation, exc)
        raise UnexpectedStorage(cause=exc) from exc


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    if getattr(orig, "pgcode", None) == "23505":
        return True
    # sqlite3: "UNIQUE constraint failed: ..."
    return "unique" in str(orig).lower()
