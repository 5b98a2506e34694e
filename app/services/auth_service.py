import logging
import uuid
from typing import Optional
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from app.database.connection import AsyncSessionLocal
from app.models.account import Account
from app.utils.exceptions import AuthError, ConflictError, NotFoundError
from app.utils.security import verify_password, get_password_hash

logger = logging.getLogger(__name__)

# Unknown emails are checked against this hash; every failed login runs one bcrypt comparison
_UNKNOWN_ACCOUNT_HASH = get_password_hash("unknown-account-placeholder")


def account_to_dict(account: Account) -> dict:
    """Serialize an account. The password hash is never included."""
    return {
        "id": account.id,
        "name": account.name,
        "email": account.email,
        "phone": account.phone,
        "role": account.role,
        "status": account.status,
        "created_at": account.created_at.isoformat() if account.created_at else "",
        "updated_at": account.updated_at.isoformat() if account.updated_at else "",
    }


async def create_account(
    name: str,
    email: str,
    password: str,
    phone: Optional[str] = None,
    role: str = "user"
) -> dict:
    """Store a new account; the unique email constraint decides duplicates"""
    async with AsyncSessionLocal() as session:
        new_account = Account(
            id=str(uuid.uuid4()),
            name=name,
            email=email.strip().lower(),
            phone=phone,
            hashed_password=get_password_hash(password),
            role=role,
            status="active",
        )
        session.add(new_account)
        
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise ConflictError("Email already in use")
        
        await session.refresh(new_account)
        logger.info(f"Account created - ID: {new_account.id}, role: {role}")
        
        return account_to_dict(new_account)


async def register_account(name: str, email: str, password: str, phone: Optional[str] = None) -> dict:
    """Public signup; the role is always 'user'"""
    return await create_account(name=name, email=email, password=password, phone=phone, role="user")


async def authenticate_account(email: str, password: str, admin_only: bool = False) -> dict:
    """Check credentials and return the account, raising AuthError on failure"""
    async with AsyncSessionLocal() as session:
        stmt = select(Account).where(Account.email == email.strip().lower())
        result = await session.execute(stmt)
        account = result.scalar_one_or_none()
        
        if not account:
            verify_password(password, _UNKNOWN_ACCOUNT_HASH)
            logger.info("Failed login attempt")
            raise AuthError("Invalid credentials")
        
        if not verify_password(password, account.hashed_password):
            logger.info("Failed login attempt")
            raise AuthError("Invalid credentials")
        
        if admin_only and account.role != "admin":
            raise AuthError("Admin access required", forbidden=True)
        
        if account.status == "blocked":
            raise AuthError("Account is blocked", forbidden=True)
        
        return account_to_dict(account)


async def get_account_by_id(account_id: str) -> Optional[dict]:
    """Get account by ID"""
    async with AsyncSessionLocal() as session:
        stmt = select(Account).where(Account.id == account_id)
        result = await session.execute(stmt)
        account = result.scalar_one_or_none()
        
        if not account:
            return None
        
        return account_to_dict(account)


async def change_password(account_id: str, current_password: str, new_password: str) -> None:
    """Verify the current password and store a fresh hash of the new one"""
    async with AsyncSessionLocal() as session:
        stmt = select(Account).where(Account.id == account_id)
        result = await session.execute(stmt)
        account = result.scalar_one_or_none()
        
        if not account:
            raise NotFoundError("User not found")
        
        if not verify_password(current_password, account.hashed_password):
            raise AuthError("Current password is incorrect")
        
        account.hashed_password = get_password_hash(new_password)
        await session.commit()
        logger.info(f"Password changed - ID: {account_id}")
