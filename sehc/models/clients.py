"""Models for clients table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from sehc.models import Base


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    phone = Column(String(30), nullable=False)
    invoice = Column(Boolean, nullable=False, default=False)
    social_reason = Column(String(255))
    zipcode = Column(String(10))
    fiscal_regimen = Column(String(255))
    email = Column(String(255))
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    vehicles = relationship(
        "Vehicle",
        back_populates="client",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:  # pragma: no cover - helper for debugging
        return f"<Client id={self.id} name={self.name!r} last_name={self.last_name!r}>"
