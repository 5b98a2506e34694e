from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Literal

EnquiryStatus = Literal["new", "reviewed", "in_progress", "closed"]


class EnquiryCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: str = Field(..., min_length=5, max_length=30)
    message: str = Field(..., min_length=1, max_length=5000)
    property_id: Optional[str] = None


class EnquiryStatusUpdateRequest(BaseModel):
    status: EnquiryStatus


class EnquiryPropertySummary(BaseModel):
    id: str
    title: str
    slug: str


class EnquiryResponse(BaseModel):
    id: str
    name: str
    email: Optional[str] = None
    phone: str
    message: str
    property_id: Optional[str] = None
    property: Optional[EnquiryPropertySummary] = None
    status: str
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class PaginatedEnquiriesResponse(BaseModel):
    items: List[EnquiryResponse]
    total: int
    page: int
    page_size: int
