"""
Package Models - fixed-price bundles of menu items
"""
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, ForeignKey, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from app.database import Base


class Package(Base):
    __tablename__ = "packages"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    price_per_guest = Column(Float, nullable=False, default=0.0)
    min_guests = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    items = relationship("PackageItem", back_populates="package", cascade="all, delete-orphan", order_by="PackageItem.created_at")

    def __repr__(self):
        return f"<Package {self.name} {self.price_per_guest}>"


class PackageItem(Base):
    __tablename__ = "package_items"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    package_id = Column(Uuid(as_uuid=True), ForeignKey("packages.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_item_id = Column(Uuid(as_uuid=True), ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False)
    qty_per_guest = Column(Float, nullable=False, default=1.0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    package = relationship("Package", back_populates="items")
    menu_item = relationship("MenuItem")

    __table_args__ = (
        UniqueConstraint("package_id", "menu_item_id", name="uq_package_menu_item"),
    )
