"""
Route database model.

Routes are managed by the operations module; this backend only counts them
to decide whether a company or vehicle can be deleted.
"""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from cort_backend.app.db.session import Base


class Route(Base):
    """Shuttle route served by a company, optionally with an assigned vehicle."""
    __tablename__ = "routes"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), nullable=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
