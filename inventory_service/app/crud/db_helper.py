from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.exceptions import DependencyError


def commit_or_raise(db: Session, action: str, *instances):
    """Commit the session and refresh ``instances``; roll back and raise
    DependencyError if the database refuses."""
    try:
        db.commit()
        for instance in instances:
            db.refresh(instance)
    except SQLAlchemyError as e:
        db.rollback()
        raise DependencyError(f"Could not {action}", e) from e
