from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from app.schemas.enquiry import (
    EnquiryCreateRequest,
    EnquiryStatusUpdateRequest,
    EnquiryResponse,
    PaginatedEnquiriesResponse,
    EnquiryStatus,
)
from app.services.enquiry_service import (
    create_enquiry,
    list_enquiries,
    get_enquiry,
    update_enquiry_status,
    delete_enquiry,
)
from app.utils.dependencies import TokenClaims, require_admin

router = APIRouter(prefix="/enquiries", tags=["Enquiries"])


@router.post("", response_model=EnquiryResponse, status_code=status.HTTP_201_CREATED)
async def create_enquiry_endpoint(request: EnquiryCreateRequest):
    """Submit an enquiry from the public site"""
    enquiry = await create_enquiry(
        name=request.name,
        email=request.email,
        phone=request.phone,
        message=request.message,
        property_id=request.property_id,
    )
    return EnquiryResponse(**enquiry)


@router.get("", response_model=PaginatedEnquiriesResponse)
async def get_enquiries(
    status: Optional[EnquiryStatus] = None,
    property_id: Optional[str] = None,
    page: int = Query(1, ge=1, le=10000),
    page_size: int = Query(20, ge=1, le=100),
    claims: TokenClaims = Depends(require_admin)
):
    """Get all enquiries with optional filters (Admin only)"""
    items, total = await list_enquiries(status=status, property_id=property_id, page=page, page_size=page_size)
    return PaginatedEnquiriesResponse(
        items=[EnquiryResponse(**item) for item in items],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{enquiry_id}", response_model=EnquiryResponse)
async def get_enquiry_endpoint(enquiry_id: str, claims: TokenClaims = Depends(require_admin)):
    enquiry = await get_enquiry(enquiry_id)
    return EnquiryResponse(**enquiry)


@router.patch("/{enquiry_id}/status", response_model=EnquiryResponse)
async def update_enquiry_status_endpoint(
    enquiry_id: str,
    request: EnquiryStatusUpdateRequest,
    claims: TokenClaims = Depends(require_admin)
):
    """Move an enquiry through new / reviewed / in_progress / closed (Admin only)"""
    enquiry = await update_enquiry_status(enquiry_id, request.status)
    return EnquiryResponse(**enquiry)


@router.delete("/{enquiry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_enquiry_endpoint(enquiry_id: str, claims: TokenClaims = Depends(require_admin)):
    await delete_enquiry(enquiry_id)
