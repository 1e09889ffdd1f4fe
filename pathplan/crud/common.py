from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pathplan.core.exceptions import StorageError
from pathplan.core.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def storage_guard(db: Session, operation: str):
    """Roll back and re-raise SQLAlchemy failures as StorageError"""
    try:
        yield
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("%s failed: %s", operation, exc)
        raise StorageError(operation, str(exc)) from exc
