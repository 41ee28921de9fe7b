# app/models/inventory.py
import uuid
from sqlalchemy import Column, Integer, Uuid
from shared.core.database import Base


class InventoryRecord(Base):
    __tablename__ = "inventory"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    # No FK: deleting a product leaves its stock row behind
    product_id = Column(Uuid(as_uuid=True), nullable=False,
                        unique=True, index=True)
    # May go negative, no floor
    quantity_on_hand = Column(Integer, nullable=False, default=0)
