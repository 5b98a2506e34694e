from fastapi import APIRouter, Depends, Query, status
from typing import Optional, Literal
from app.schemas.account import (
    AccountResponse,
    AccountCreateRequest,
    AccountStatusUpdateRequest,
    PaginatedAccountsResponse,
)
from app.services.auth_service import create_account
from app.services.account_service import (
    list_accounts,
    get_account,
    set_account_status,
    delete_account,
)
from app.utils.dependencies import TokenClaims, require_admin

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=PaginatedAccountsResponse)
async def get_users(
    search: Optional[str] = None,
    role: Optional[Literal["admin", "user"]] = None,
    status: Optional[Literal["active", "blocked"]] = None,
    page: int = Query(1, ge=1, le=10000),
    page_size: int = Query(20, ge=1, le=100),
    claims: TokenClaims = Depends(require_admin)
):
    """Get all accounts with filters (Admin only)"""
    accounts, total = await list_accounts(search=search, role=role, status=status, page=page, page_size=page_size)
    return PaginatedAccountsResponse(
        items=[AccountResponse(**account) for account in accounts],
        total=total,
        page=page,
        page_size=page_size,
    )


@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
async def create_user(request: AccountCreateRequest, claims: TokenClaims = Depends(require_admin)):
    """Create an account with any role (Admin only)"""
    account = await create_account(
        name=request.name,
        email=request.email,
        password=request.password,
        phone=request.phone,
        role=request.role,
    )
    return AccountResponse(**account)


@router.get("/{user_id}", response_model=AccountResponse)
async def get_user(user_id: str, claims: TokenClaims = Depends(require_admin)):
    account = await get_account(user_id)
    return AccountResponse(**account)


@router.patch("/{user_id}/status", response_model=AccountResponse)
async def update_user_status(
    user_id: str,
    request: AccountStatusUpdateRequest,
    claims: TokenClaims = Depends(require_admin)
):
    """Block or re-activate an account (Admin only)"""
    account = await set_account_status(user_id, request.status, acting_account_id=claims.account_id)
    return AccountResponse(**account)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, claims: TokenClaims = Depends(require_admin)):
    """Delete an account; admins cannot delete themselves (Admin only)"""
    await delete_account(user_id, acting_account_id=claims.account_id)
