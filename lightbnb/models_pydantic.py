from typing import Optional
from datetime import date
from pydantic import BaseModel, ConfigDict, EmailStr, Field

class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr

class UserCreate(UserBase):
    password: str = Field(..., min_length=1, max_length=255)

class UserRecord(BaseModel):
    """A users row as stored, password included."""
    id: int
    name: str
    email: str
    password: str

    model_config = ConfigDict(from_attributes=True)

class UserResponse(BaseModel):
    id: int
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)

class PropertyFields(BaseModel):
    """Property columns as stored; no input limits so any stored row loads."""
    owner_id: int
    title: str
    description: Optional[str] = None
    thumbnail_photo_url: str
    cover_photo_url: str
    cost_per_night: int
    parking_spaces: int = 0
    number_of_bathrooms: int = 0
    number_of_bedrooms: int = 0
    country: str
    street: str
    city: str
    province: str
    post_code: str
    active: bool = True

class PropertyCreate(PropertyFields):
    title: str = Field(..., min_length=1, max_length=255)
    thumbnail_photo_url: str = Field(..., max_length=255)
    cover_photo_url: str = Field(..., max_length=255)
    cost_per_night: int = Field(..., ge=0, description="Price in cents")
    parking_spaces: int = Field(0, ge=0)
    number_of_bathrooms: int = Field(0, ge=0)
    number_of_bedrooms: int = Field(0, ge=0)
    country: str = Field(..., min_length=1, max_length=255)
    street: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=255)
    province: str = Field(..., min_length=1, max_length=255)
    post_code: str = Field(..., min_length=1, max_length=255)

class PropertyRecord(PropertyFields):
    id: int
    average_rating: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)

class ReservationRecord(BaseModel):
    id: int
    guest_id: int
    property_id: int
    start_date: date
    end_date: date
    property: PropertyRecord
    average_rating: Optional[float] = None

    model_config = ConfigDict(from_attributes=True)

class PropertyFilters(BaseModel):
    """Search options for property listing. Prices are in dollars."""
    city: Optional[str] = None
    owner_id: Optional[int] = None
    minimum_price_per_night: Optional[float] = Field(None, ge=0)
    maximum_price_per_night: Optional[float] = Field(None, ge=0)
    minimum_rating: Optional[float] = Field(None, ge=0, le=5)
