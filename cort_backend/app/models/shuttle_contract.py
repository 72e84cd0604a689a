"""
Shuttle contract database model (referenced for delete checks only).
"""

from sqlalchemy import Column, Integer, DateTime, ForeignKey
from sqlalchemy.sql import func
from cort_backend.app.db.session import Base


class ShuttleContract(Base):
    """Client shuttle contract with a dedicated vehicle."""
    __tablename__ = "shuttle_contracts"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
