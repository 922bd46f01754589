"""
Inventory Item Model - ingredients and supplies with unit costs
"""
from sqlalchemy import Column, String, Float, Date, DateTime, ForeignKey, Uuid
from datetime import datetime
import uuid

from app.database import Base


class InventoryItem(Base):
    __tablename__ = "inventory_items"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=True)
    unit_type = Column(String, nullable=False, default="unit")
    cost_per_unit = Column(Float, nullable=False, default=0.0)
    current_quantity = Column(Float, nullable=False, default=0.0)
    minimum_stock = Column(Float, nullable=False, default=0.0)
    storage_location = Column(String, nullable=True)
    expiry_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    def is_low_stock(self) -> bool:
        return self.current_quantity <= self.minimum_stock

    def __repr__(self):
        return f"<InventoryItem {self.name} {self.current_quantity}{self.unit_type}>"
