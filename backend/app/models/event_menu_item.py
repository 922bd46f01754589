"""
Event Menu Item Model - a dish or package chosen for an event
"""
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from app.database import Base


class EventMenuItem(Base):
    __tablename__ = "event_menu_items"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    # Exactly one of menu_item_id / package_id is set
    menu_item_id = Column(Uuid(as_uuid=True), ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=True)
    package_id = Column(Uuid(as_uuid=True), ForeignKey("packages.id", ondelete="CASCADE"), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)
    per_guest_price = Column(Float, nullable=True)  # overrides the catalog price when set
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    event = relationship("Event", back_populates="menu_items")
    menu_item = relationship("MenuItem")
    package = relationship("Package")

    @property
    def name(self) -> str:
        if self.menu_item is not None:
            return self.menu_item.name
        return self.package.name if self.package is not None else ""

    @property
    def catalog_price(self) -> float:
        if self.menu_item is not None:
            return self.menu_item.base_price_per_guest
        if self.package is not None:
            return self.package.price_per_guest
        return 0.0

    @property
    def effective_price(self) -> float:
        """Per-guest price charged for this line"""
        return self.per_guest_price if self.per_guest_price is not None else self.catalog_price

    def __repr__(self):
        return f"<EventMenuItem {self.menu_item_id or self.package_id} x{self.quantity}>"
