# app/models/sales.py
import uuid
from datetime import datetime, timezone
from sqlalchemy import TIMESTAMP, Column, Integer, Numeric, String, Uuid
from shared.core.database import Base


def _utcnow():
    return datetime.now(timezone.utc)


class Sale(Base):
    __tablename__ = "sales"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    product_id = Column(Uuid(as_uuid=True), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    sale_price = Column(Numeric(12, 2), nullable=False)
    total_amount = Column(Numeric(14, 2), nullable=False)
    channel = Column(String(32), nullable=False, index=True)
    channel_order_id = Column(String(128))
    date_time = Column(TIMESTAMP(timezone=True), nullable=False, default=_utcnow)
