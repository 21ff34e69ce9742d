"""
Create-or-remove toggle for association rows (likes, follows).

The association table must carry a unique constraint over the key columns.
That constraint is what settles concurrent toggles: if our insert loses a
race against an identical insert, the IntegrityError is taken to mean the
row already exists and the toggle flips to the remove branch. Two
simultaneous toggles on the same pair therefore end with no row rather than
with a duplicate.
"""
import enum
import logging
import uuid
from typing import Any, Type

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class ToggleResult(str, enum.Enum):
    ADDED = "added"
    REMOVED = "removed"


def _remove(db: Session, model: Type[Any], keys: dict) -> ToggleResult:
    deleted = db.query(model).filter_by(**keys).delete(synchronize_session="fetch")
    db.commit()
    if not deleted:
        # Someone else removed it between our lookup and our delete
        logger.debug(f"{model.__tablename__} row {keys} already gone")
    return ToggleResult.REMOVED


def toggle_association(db: Session, model: Type[Any], **keys: Any) -> ToggleResult:
    """Delete the row matching ``keys`` if it exists, otherwise create it."""
    try:
        existing = db.query(model).filter_by(**keys).first()
        if existing is not None:
            return _remove(db, model, keys)

        db.add(model(id=str(uuid.uuid4()), **keys))
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.info(f"Concurrent insert on {model.__tablename__} {keys}, toggling to removed")
            return _remove(db, model, keys)
        return ToggleResult.ADDED
    except Exception:
        db.rollback()
        raise
