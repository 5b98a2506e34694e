from fastapi import APIRouter, Depends, Response, status
from app.config import settings
from app.schemas.account import AccountResponse
from app.schemas.auth import (
    SignupRequest,
    LoginRequest,
    ChangePasswordRequest,
    AuthResponse,
    MessageResponse,
)
from app.services.auth_service import (
    register_account,
    authenticate_account,
    get_account_by_id,
    change_password,
)
from app.utils.dependencies import TokenClaims, get_current_claims
from app.utils.exceptions import NotFoundError
from app.utils.security import create_access_token

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _issue_session(response: Response, account: dict) -> AuthResponse:
    """Sign a token for the account and mirror it into an httpOnly cookie"""
    token = create_access_token(account_id=account["id"], role=account["role"], email=account["email"])
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.AUTH_COOKIE_SECURE,
        max_age=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return AuthResponse(token=token, user=AccountResponse(**account))


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(request: SignupRequest, response: Response):
    """Create a regular user account and log it in"""
    account = await register_account(
        name=request.name,
        email=request.email,
        password=request.password,
        phone=request.phone,
    )
    return _issue_session(response, account)


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, response: Response):
    """Login and get access token"""
    account = await authenticate_account(email=request.email, password=request.password)
    return _issue_session(response, account)


@router.post("/admin/login", response_model=AuthResponse)
async def login_admin(request: LoginRequest, response: Response):
    """Login for the back-office; the account must have the admin role"""
    account = await authenticate_account(email=request.email, password=request.password, admin_only=True)
    return _issue_session(response, account)


@router.get("/me", response_model=AccountResponse)
async def get_current_account(claims: TokenClaims = Depends(get_current_claims)):
    """Get current logged-in account"""
    account = await get_account_by_id(claims.account_id)

    if not account:
        raise NotFoundError("User not found")

    return AccountResponse(**account)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response, claims: TokenClaims = Depends(get_current_claims)):
    """Clear the session cookie. Bearer tokens are simply discarded by the client."""
    response.delete_cookie(settings.AUTH_COOKIE_NAME, httponly=True, samesite="lax", secure=settings.AUTH_COOKIE_SECURE)
    return MessageResponse(message="Logged out successfully")


@router.patch("/password", response_model=MessageResponse)
async def update_password(request: ChangePasswordRequest, claims: TokenClaims = Depends(get_current_claims)):
    await change_password(claims.account_id, request.current_password, request.new_password)
    return MessageResponse(message="Password updated successfully")
