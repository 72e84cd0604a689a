"""
Vehicle Pydantic schemas.

Defines request and response models for vehicle management.
"""

from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from typing import Optional
from cort_backend.app.models.vehicle_enums import VehicleCategory, OwnershipType
from cort_backend.app.schemas.company import CompanySummary

MIN_VEHICLE_YEAR = 1900


def _check_year(value: Optional[int]) -> Optional[int]:
    if value is None:
        return value
    max_year = datetime.now().year + 1
    if value < MIN_VEHICLE_YEAR or value > max_year:
        raise ValueError(f"Year must be between {MIN_VEHICLE_YEAR} and {max_year}")
    return value


class VehicleCreate(BaseModel):
    """Schema for registering a new vehicle."""
    plate_number: str = Field(..., min_length=1, max_length=50, description="Unique plate number")
    make: str = Field(..., min_length=1, max_length=100, description="Vehicle make/brand")
    model: str = Field(..., min_length=1, max_length=100, description="Vehicle model")
    year: int = Field(..., description="Vehicle year")
    color: Optional[str] = Field(None, max_length=50)
    category: VehicleCategory
    ownership: OwnershipType
    fuel_avg_city: float = Field(..., ge=0, description="Fuel average in city (km/l)")
    fuel_avg_highway: float = Field(..., ge=0, description="Fuel average on highway (km/l)")
    owner_company_id: Optional[int] = Field(
        None,
        description="Owner company. Super Admins may only create platform vehicles, so this must be omitted by them."
    )
    is_available_for_pooling: bool = Field(False, description="Is vehicle available for pooling/sharing")

    @field_validator("year")
    @classmethod
    def validate_year(cls, value):
        return _check_year(value)


class VehicleUpdate(BaseModel):
    """
    Schema for updating an existing vehicle.
    
    owner_company_id is not part of the schema: ownership cannot be
    transferred through an update.
    """
    plate_number: Optional[str] = Field(None, min_length=1, max_length=50)
    make: Optional[str] = Field(None, min_length=1, max_length=100)
    model: Optional[str] = Field(None, min_length=1, max_length=100)
    year: Optional[int] = None
    color: Optional[str] = Field(None, max_length=50)
    category: Optional[VehicleCategory] = None
    ownership: Optional[OwnershipType] = None
    fuel_avg_city: Optional[float] = Field(None, ge=0)
    fuel_avg_highway: Optional[float] = Field(None, ge=0)
    is_available_for_pooling: Optional[bool] = None

    @field_validator("year")
    @classmethod
    def validate_year(cls, value):
        return _check_year(value)


class VehicleResponse(BaseModel):
    """Schema for vehicle response."""
    id: int
    plate_number: str
    make: str
    model: str
    year: int
    color: Optional[str]
    category: VehicleCategory
    ownership: OwnershipType
    fuel_avg_city: float
    fuel_avg_highway: float
    owner_company_id: Optional[int]
    is_available_for_pooling: bool
    owner_company: Optional[CompanySummary] = None
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True
