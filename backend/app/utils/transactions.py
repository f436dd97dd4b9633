import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.errors import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def smart_transaction(session: Session, action: str = "database operation") -> Iterator[Session]:
    """
    Run the block in one transaction on ``session``.

    If the caller already holds a transaction, a SAVEPOINT (begin_nested) is
    used so the caller keeps control of the final commit. Otherwise a normal
    transaction is started and committed on exit.

    Any SQLAlchemyError rolls the block back, is logged in full and re-raised
    as a StorageError whose message carries no SQL or bound parameters;
    domain errors (ProductNotFound, ...) roll back and propagate unchanged.

    Usage:
        with smart_transaction(db, "update product"):
            ... DB work ...
    """
    if session.in_transaction():
        cm = session.begin_nested()
    else:
        cm = session.begin()
    try:
        with cm:
            yield session
    except SQLAlchemyError as e:
        logger.exception("Storage failure during %s", action)
        raise StorageError(f"There's an error when trying to {action}") from e
