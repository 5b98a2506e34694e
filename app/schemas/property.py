from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal
from app.utils.slugs import normalize_slug

PropertyStatus = Literal["draft", "pending", "approved", "rejected"]

# Largest value that fits the Numeric(14, 2) price column
MAX_PRICE = 999_999_999_999.99


class PropertyResponse(BaseModel):
    id: str
    title: str
    slug: str
    price: float
    property_type: str
    status: str
    location: str
    city: Optional[str] = None
    area: Optional[float] = None
    bedrooms: Optional[int] = None
    bathrooms: Optional[int] = None
    features: List[str] = []
    description: Optional[str] = None
    images: List[str] = []
    cover_image: Optional[str] = None
    premium: bool = False
    owner_contact: str
    created_by: Optional[str] = None
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class PropertyCreateRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)  # Derived from title when omitted
    price: float = Field(..., ge=0, le=MAX_PRICE, allow_inf_nan=False)
    property_type: str = Field(..., min_length=1)
    status: Optional[PropertyStatus] = None  # Only honoured for admins
    location: str = Field(..., min_length=1)
    city: Optional[str] = None
    area: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    features: List[str] = []
    description: Optional[str] = None
    images: List[str] = []
    cover_image: Optional[str] = None
    premium: bool = False
    owner_contact: str = Field(..., min_length=1)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v):
        return normalize_slug(v) if v is not None else v


class PropertyUpdateRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[float] = Field(None, ge=0, le=MAX_PRICE, allow_inf_nan=False)
    property_type: Optional[str] = Field(None, min_length=1)
    status: Optional[PropertyStatus] = None
    location: Optional[str] = Field(None, min_length=1)
    city: Optional[str] = None
    area: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[int] = Field(None, ge=0)
    features: Optional[List[str]] = None
    description: Optional[str] = None
    images: Optional[List[str]] = None
    cover_image: Optional[str] = None
    premium: Optional[bool] = None
    owner_contact: Optional[str] = Field(None, min_length=1)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v):
        return normalize_slug(v) if v is not None else v


class PropertyStatusUpdateRequest(BaseModel):
    status: PropertyStatus


class PaginatedPropertiesResponse(BaseModel):
    items: List[PropertyResponse]
    total: int
    page: int
    page_size: int
