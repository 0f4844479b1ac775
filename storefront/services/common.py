import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.exceptions import ConstraintViolationError

logger = logging.getLogger(__name__)


def commit_or_raise(db: Session, message: str):
    """Commit the session; a database constraint failure becomes a ConstraintViolationError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning("%s: %s", message, e.orig)
        raise ConstraintViolationError(message) from e
