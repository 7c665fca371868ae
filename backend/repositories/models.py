"""
SQLAlchemy ORM models for persistence.
"""
from sqlalchemy import Column, DateTime, Float, ForeignKey, Numeric, String
from sqlalchemy.orm import relationship

from db import Base
from domain.models import utcnow


class GarageORM(Base):
    __tablename__ = "garages"

    id = Column(String, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(500), nullable=False, default="")
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    rating = Column(Numeric(3, 2, asdecimal=False), nullable=False, default=0, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True)

    services = relationship(
        "ServiceORM",
        back_populates="garage",
        cascade="all, delete-orphan",
    )


class ServiceORM(Base):
    __tablename__ = "services"

    id = Column(String, primary_key=True, index=True)
    garage_id = Column(String, ForeignKey("garages.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(String(1000), nullable=False, default="")
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    garage = relationship("GarageORM", back_populates="services")


class AutoPartsShopORM(Base):
    __tablename__ = "auto_parts_shops"

    id = Column(String, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    address = Column(String(500), nullable=False, default="")
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    rating = Column(Numeric(3, 2, asdecimal=False), nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, nullable=True)
