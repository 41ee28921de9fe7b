"""Create the first login account from ADMIN_EMAIL / ADMIN_PASSWORD.

Run once against a fresh database:  python -m shared.data.admin_user_insert
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from shared.core.config import settings
from shared.core.database import Base, SessionLocal, engine
from shared.models.users import Users
from shared.utils.enums import UserStatus

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def create_admin_user(db, email: str, password: str) -> Users:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValueError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    existing = db.query(Users).filter(Users.email == email.strip().lower()).first()
    if existing:
        logger.info("Admin user already exists: %s", existing.email)
        return existing

    user = Users(status=UserStatus.ACTIVE.value)
    user.set_email(email)
    user.set_password(password)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Admin user created: %s", user.email)
    return user


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)
    if not settings.ADMIN_EMAIL or not settings.ADMIN_PASSWORD:
        raise SystemExit("ADMIN_EMAIL and ADMIN_PASSWORD must be set")

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        create_admin_user(db, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error creating admin user")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
