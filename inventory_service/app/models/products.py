# app/models/products.py
import uuid
from sqlalchemy import JSON, TIMESTAMP, Boolean, Column, Numeric, String, Uuid, func
from shared.core.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False, index=True)
    tags = Column(JSON, nullable=False, default=list)
    price = Column(Numeric(12, 2), nullable=False, default=0)
    is_deprecated = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True),
                        server_default=func.now(), onupdate=func.now())
