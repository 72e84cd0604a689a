"""
User database model.

Local directory record for an identity-provider account. The primary key is
the provider's subject id, so a verified token maps to exactly one row.
"""

from sqlalchemy import Column, Integer, String, DateTime, Enum, ForeignKey
from sqlalchemy.sql import func
from cort_backend.app.db.session import Base
from cort_backend.app.models.enums import UserRole, UserStatus


class User(Base):
    """
    User model for the local user directory.
    
    Created at signup with role EMPLOYEE and status ACTIVE.
    """
    __tablename__ = "users"
    
    # Identity provider subject id (UUID)
    id = Column(String(36), primary_key=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    full_name = Column(String(255), nullable=False)
    phone = Column(String(32), unique=True, nullable=True)
    
    role = Column(Enum(UserRole), default=UserRole.EMPLOYEE, nullable=False)
    company_id = Column(Integer, ForeignKey("companies.id"), index=True, nullable=True)
    
    # Stored as plain text; a missing status is treated as inactive
    status = Column(String(20), default=UserStatus.ACTIVE.value, nullable=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role.value}')>"
