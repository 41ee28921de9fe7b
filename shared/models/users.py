import uuid
from sqlalchemy import TIMESTAMP, Column, String, Uuid, func
from passlib.context import CryptContext

from shared.utils.enums import UserStatus

from ..core.database import Base

# hashlib-backed scheme, no native bcrypt build needed
pwd_context = CryptContext(schemes=['pbkdf2_sha256'], deprecated='auto')


class Users(Base):
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(200), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    status = Column(String(16), nullable=False, default=UserStatus.ACTIVE.value)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())

    def set_email(self, email: str):
        self.email = email.strip().lower()

    def set_password(self, password: str):
        self.password = pwd_context.hash(password)

    def verify_password(self, password: str) -> bool:
        return pwd_context.verify(password, self.password)
