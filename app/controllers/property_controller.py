"""
Property Controller - Public browsing, submissions and moderation
"""
from fastapi import APIRouter, Depends, Query, status
from typing import Optional
from app.schemas.property import (
    PropertyResponse,
    PropertyCreateRequest,
    PropertyUpdateRequest,
    PropertyStatusUpdateRequest,
    PaginatedPropertiesResponse,
    PropertyStatus,
)
from app.services.property_service import (
    create_property,
    list_public_properties,
    list_all_properties,
    list_my_properties,
    get_public_property,
    update_property,
    change_property_status,
    submit_property,
    delete_property,
)
from app.utils.dependencies import TokenClaims, get_current_claims, require_admin

router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get("", response_model=PaginatedPropertiesResponse)
async def get_properties(
    search: Optional[str] = None,
    property_type: Optional[str] = None,
    city: Optional[str] = None,
    premium: Optional[bool] = None,
    min_price: Optional[float] = Query(None, ge=0, allow_inf_nan=False),
    max_price: Optional[float] = Query(None, ge=0, allow_inf_nan=False),
    bedrooms: Optional[int] = Query(None, ge=0),
    page: int = Query(1, ge=1, le=10000),
    page_size: int = Query(16, ge=1, le=100),
):
    """Published listings. Any status query parameter is ignored."""
    props, total = await list_public_properties(
        search=search,
        property_type=property_type,
        city=city,
        premium=premium,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        page=page,
        page_size=page_size,
    )
    return PaginatedPropertiesResponse(
        items=[PropertyResponse(**prop) for prop in props],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/admin/all", response_model=PaginatedPropertiesResponse)
async def get_all_properties(
    status: Optional[PropertyStatus] = None,
    search: Optional[str] = None,
    property_type: Optional[str] = None,
    city: Optional[str] = None,
    premium: Optional[bool] = None,
    min_price: Optional[float] = Query(None, ge=0, allow_inf_nan=False),
    max_price: Optional[float] = Query(None, ge=0, allow_inf_nan=False),
    bedrooms: Optional[int] = Query(None, ge=0),
    page: int = Query(1, ge=1, le=10000),
    page_size: int = Query(16, ge=1, le=100),
    claims: TokenClaims = Depends(require_admin)
):
    """Every listing regardless of status (Admin only)"""
    props, total = await list_all_properties(
        status=status,
        search=search,
        property_type=property_type,
        city=city,
        premium=premium,
        min_price=min_price,
        max_price=max_price,
        bedrooms=bedrooms,
        page=page,
        page_size=page_size,
    )
    return PaginatedPropertiesResponse(
        items=[PropertyResponse(**prop) for prop in props],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/mine", response_model=PaginatedPropertiesResponse)
async def get_my_properties(
    status: Optional[PropertyStatus] = None,
    page: int = Query(1, ge=1, le=10000),
    page_size: int = Query(16, ge=1, le=100),
    claims: TokenClaims = Depends(get_current_claims)
):
    """Listings submitted by the current account, in any state"""
    props, total = await list_my_properties(
        account_id=claims.account_id,
        status=status,
        page=page,
        page_size=page_size,
    )
    return PaginatedPropertiesResponse(
        items=[PropertyResponse(**prop) for prop in props],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.get("/{slug}", response_model=PropertyResponse)
async def get_property_by_slug(slug: str):
    """One published listing; unpublished ones are reported as missing"""
    prop = await get_public_property(slug)
    return PropertyResponse(**prop)


@router.post("", response_model=PropertyResponse, status_code=status.HTTP_201_CREATED)
async def create_property_endpoint(
    request: PropertyCreateRequest,
    claims: TokenClaims = Depends(get_current_claims)
):
    """Create a listing. Only admins may choose the initial status."""
    prop = await create_property(
        account_id=claims.account_id,
        role=claims.role,
        property_data=request.model_dump(),
    )
    return PropertyResponse(**prop)


@router.put("/{property_id}", response_model=PropertyResponse)
async def update_property_endpoint(
    property_id: str,
    request: PropertyUpdateRequest,
    claims: TokenClaims = Depends(require_admin)
):
    """Update listing details (Admin only)"""
    prop = await update_property(
        property_id=property_id,
        update_data=request.model_dump(exclude_unset=True),
        role=claims.role,
    )
    return PropertyResponse(**prop)


@router.patch("/{property_id}/status", response_model=PropertyResponse)
async def update_property_status(
    property_id: str,
    request: PropertyStatusUpdateRequest,
    claims: TokenClaims = Depends(require_admin)
):
    """Approve, reject or otherwise move a listing (Admin only)"""
    prop = await change_property_status(property_id, request.status, claims.role)
    return PropertyResponse(**prop)


@router.post("/{property_id}/submit", response_model=PropertyResponse)
async def submit_property_for_review(
    property_id: str,
    claims: TokenClaims = Depends(get_current_claims)
):
    """Send a draft or rejected listing to the review queue"""
    prop = await submit_property(property_id, claims.account_id, claims.role)
    return PropertyResponse(**prop)


@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property_endpoint(
    property_id: str,
    claims: TokenClaims = Depends(require_admin)
):
    """Delete a listing (Admin only)"""
    await delete_property(property_id)
