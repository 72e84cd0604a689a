"""
Company Pydantic schemas.

Defines request and response models for company management.
"""

from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from typing import Optional


class CompanyCreate(BaseModel):
    """Schema for creating a new company."""
    name: str = Field(..., min_length=1, max_length=255, description="Company name")
    email: EmailStr = Field(..., description="Company email address")
    ntn_number: Optional[str] = Field(None, max_length=100, description="National Tax Number (NTN)")
    contact_person: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    logo_url: Optional[str] = Field(None, max_length=1000)
    is_shuttle_enabled: bool = Field(False, description="Enable shuttle service for this company")
    is_chauffeur_enabled: bool = Field(False, description="Enable chauffeur service for this company")


class CompanyUpdate(BaseModel):
    """Schema for updating an existing company. Null values are ignored."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    ntn_number: Optional[str] = Field(None, max_length=100)
    contact_person: Optional[str] = Field(None, max_length=255)
    address: Optional[str] = Field(None, max_length=500)
    logo_url: Optional[str] = Field(None, max_length=1000)
    is_shuttle_enabled: Optional[bool] = None
    is_chauffeur_enabled: Optional[bool] = None


class CompanyResponse(BaseModel):
    """Schema for company response."""
    id: int
    name: str
    email: str
    ntn_number: Optional[str]
    contact_person: Optional[str]
    address: Optional[str]
    logo_url: Optional[str]
    is_shuttle_enabled: bool
    is_chauffeur_enabled: bool
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class CompanySummary(BaseModel):
    """Owning company as embedded in vehicle responses."""
    id: int
    name: str
    
    class Config:
        from_attributes = True
