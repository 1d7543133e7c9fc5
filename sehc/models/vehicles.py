"""Model for vehicles table."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sehc.models import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    brand = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    color = Column(String(50), nullable=False)
    plate = Column(String(20), nullable=False, unique=True)
    doors = Column(Integer, nullable=False)
    motor = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    client = relationship("Client", back_populates="vehicles")
    services = relationship("Service", back_populates="vehicle")

    def __repr__(self) -> str:  # pragma: no cover - helper for debugging
        return f"<Vehicle id={self.id} plate={self.plate!r} client_id={self.client_id}>"
