from pydantic import BaseModel, Field, field_validator
from typing import Optional
from app.utils.slugs import normalize_slug


class PageCreateRequest(BaseModel):
    slug: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v):
        return normalize_slug(v)


class PageUpsertRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: Optional[str] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = Field(None, max_length=500)


class PageResponse(BaseModel):
    id: str
    slug: str
    title: str
    content: str
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True
