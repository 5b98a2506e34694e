from pydantic import BaseModel


class PropertyStats(BaseModel):
    total: int
    draft: int
    pending: int
    approved: int
    rejected: int


class EnquiryStats(BaseModel):
    total: int
    new: int
    reviewed: int
    in_progress: int
    closed: int


class AccountStats(BaseModel):
    total: int
    admins: int
    blocked: int


class AdminDashboardResponse(BaseModel):
    properties: PropertyStats
    enquiries: EnquiryStats
    users: AccountStats
