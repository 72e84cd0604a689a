"""
Company database model.

A client company owns users, vehicles and routes.
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.sql import func
from cort_backend.app.db.session import Base


class Company(Base):
    """Company model."""
    __tablename__ = "companies"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    
    ntn_number = Column(String(100), nullable=True)  # National Tax Number
    contact_person = Column(String(255), nullable=True)
    address = Column(String(500), nullable=True)
    logo_url = Column(String(1000), nullable=True)
    
    # Service flags
    is_shuttle_enabled = Column(Boolean, default=False, nullable=False)
    is_chauffeur_enabled = Column(Boolean, default=False, nullable=False)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Company(id={self.id}, name='{self.name}', email='{self.email}')>"
