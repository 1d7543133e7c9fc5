"""Models for services and the inventory items they consume."""

from sqlalchemy import JSON, CheckConstraint, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sehc.models import Base


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id", ondelete="RESTRICT"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="RESTRICT"), nullable=False)
    status_id = Column(Integer, nullable=False)
    type_id = Column(Integer, nullable=False)
    priority_id = Column(Integer, nullable=False)
    diagnostic = Column(Text)
    gas_level = Column(String(50))
    km = Column(Integer)
    service_details = Column(JSON)
    total_cost = Column(Numeric(10, 2))
    service_notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    vehicle = relationship("Vehicle", back_populates="services")
    user = relationship("User")
    inventory_items = relationship(
        "ServiceInventoryItem",
        back_populates="service",
        cascade="all, delete-orphan",
        order_by="ServiceInventoryItem.id",
    )

    def __repr__(self) -> str:  # pragma: no cover - helper for debugging
        return f"<Service id={self.id} vehicle_id={self.vehicle_id} user_id={self.user_id}>"


class ServiceInventoryItem(Base):
    __tablename__ = "service_inventory_items"
    __table_args__ = (CheckConstraint("quantity > 0", name="ck_service_inventory_items_quantity_positive"),)

    id = Column(Integer, primary_key=True, index=True)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
    inventory_item_id = Column(Integer, ForeignKey("inventory_items.id", ondelete="RESTRICT"), nullable=False)
    quantity = Column(Integer, nullable=False)

    service = relationship("Service", back_populates="inventory_items")
    inventory_item = relationship("InventoryItem", back_populates="service_links")

    def __repr__(self) -> str:  # pragma: no cover - helper for debugging
        return (
            f"<ServiceInventoryItem id={self.id} service_id={self.service_id} "
            f"inventory_item_id={self.inventory_item_id} quantity={self.quantity}>"
        )
