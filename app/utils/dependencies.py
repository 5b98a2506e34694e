from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config import settings
from app.services.auth_service import get_account_by_id
from app.utils.exceptions import AuthError
from app.utils.security import verify_access_token

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenClaims:
    account_id: str
    role: str
    email: str


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    """Bearer header first, then the session cookie"""
    if credentials and credentials.scheme.lower() == "bearer" and credentials.credentials:
        return credentials.credentials
    return request.cookies.get(settings.AUTH_COOKIE_NAME) or None


async def get_current_claims(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenClaims:
    """Require a valid token and return the identity it carries"""
    token = _extract_token(request, credentials)
    if not token:
        raise AuthError("Not authenticated")

    payload = verify_access_token(token)
    claims = TokenClaims(
        account_id=payload["sub"],
        role=payload["role"],
        email=payload["email"],
    )

    if settings.ENFORCE_ACCOUNT_STATUS:
        account = await get_account_by_id(claims.account_id)
        if not account or account["status"] != "active":
            raise AuthError("Account not found or blocked")
        # Authorize with the stored role rather than the snapshot in the token
        claims = TokenClaims(account_id=account["id"], role=account["role"], email=account["email"])

    return claims


def require_role(*allowed_roles: str):
    """Authentication is checked first, so a missing token is always a 401"""
    async def role_checker(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role not in allowed_roles:
            raise AuthError("Forbidden", forbidden=True)
        return claims
    return role_checker


require_admin = require_role("admin")
