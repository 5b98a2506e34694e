from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Literal


class AccountResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    role: str
    status: str
    created_at: str
    updated_at: str

    class Config:
        from_attributes = True


class AccountCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    password: str = Field(..., min_length=6)
    role: Literal["admin", "user"] = "user"


class AccountStatusUpdateRequest(BaseModel):
    status: Literal["active", "blocked"]


class PaginatedAccountsResponse(BaseModel):
    items: List[AccountResponse]
    total: int
    page: int
    page_size: int
