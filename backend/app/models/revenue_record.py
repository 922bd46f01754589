"""
Revenue Record Model - one row of realised revenue and costs, usually per event
"""
from sqlalchemy import Column, String, Float, Date, DateTime, ForeignKey, Index, Uuid
from sqlalchemy.orm import relationship
from datetime import datetime
import uuid

from app.database import Base


class RevenueRecord(Base):
    __tablename__ = "revenue_records"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    organization_id = Column(Uuid(as_uuid=True), ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False)
    event_id = Column(Uuid(as_uuid=True), ForeignKey("events.id", ondelete="SET NULL"), nullable=True)
    client_id = Column(Uuid(as_uuid=True), ForeignKey("clients.id", ondelete="SET NULL"), nullable=True)
    revenue_date = Column(Date, nullable=False)
    gross_revenue = Column(Float, nullable=False, default=0.0)
    food_costs = Column(Float, nullable=False, default=0.0)
    labor_costs = Column(Float, nullable=False, default=0.0)
    other_expenses = Column(Float, nullable=False, default=0.0)
    # Stored, never recomputed by analytics
    net_profit = Column(Float, nullable=False, default=0.0)
    tax_amount = Column(Float, nullable=False, default=0.0)
    payment_method = Column(String, nullable=False, default="cash")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    client = relationship("Client")

    __table_args__ = (
        Index("idx_revenue_org_date", "organization_id", "revenue_date"),
    )

    def __repr__(self):
        return f"<RevenueRecord {self.revenue_date} {self.gross_revenue}>"
