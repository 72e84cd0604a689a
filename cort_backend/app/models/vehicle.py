"""
Vehicle database model.

A vehicle either belongs to a client company (owner_company_id set) or to the
platform-managed fleet (owner_company_id NULL).
"""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from cort_backend.app.db.session import Base
from cort_backend.app.models.vehicle_enums import VehicleCategory, OwnershipType


class Vehicle(Base):
    """
    Vehicle model.
    
    owner_company_id is fixed at creation; no update path changes it.
    """
    __tablename__ = "vehicles"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    
    # Vehicle identification
    plate_number = Column(String(50), unique=True, nullable=False, index=True)
    make = Column(String(100), nullable=False)
    model = Column(String(100), nullable=False)
    year = Column(Integer, nullable=False)
    color = Column(String(50), nullable=True)
    
    category = Column(Enum(VehicleCategory), nullable=False)
    ownership = Column(Enum(OwnershipType), nullable=False)
    
    # Fuel consumption (km/l)
    fuel_avg_city = Column(Float, nullable=False)
    fuel_avg_highway = Column(Float, nullable=False)
    
    # NULL = platform-managed fleet
    owner_company_id = Column(Integer, ForeignKey("companies.id"), nullable=True, index=True)
    is_available_for_pooling = Column(Boolean, default=False, nullable=False)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    owner_company = relationship("Company", lazy="selectin")
    
    def __repr__(self):
        return f"<Vehicle(id={self.id}, plate='{self.plate_number}', owner_company_id={self.owner_company_id})>"
