"""
Account Service - Admin management of user accounts
"""
import logging
from typing import Optional, List, Tuple
from sqlalchemy import select, update, delete, or_, desc, func
from app.database.connection import AsyncSessionLocal
from app.models.account import Account, ACCOUNT_STATUSES
from app.models.property import Property
from app.services.auth_service import account_to_dict
from app.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


async def list_accounts(
    search: Optional[str] = None,
    role: Optional[str] = None,
    status: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
) -> Tuple[List[dict], int]:
    """Accounts with filters, latest first. Returns (items, total)."""
    async with AsyncSessionLocal() as session:
        conditions = []
        
        if search:
            search_pattern = f"%{search}%"
            conditions.append(
                or_(
                    Account.name.ilike(search_pattern),
                    Account.email.ilike(search_pattern),
                )
            )
        
        if role:
            conditions.append(Account.role == role)
        
        if status:
            conditions.append(Account.status == status)
        
        count_stmt = select(func.count()).select_from(Account).where(*conditions)
        total_result = await session.execute(count_stmt)
        total = total_result.scalar_one() or 0
        
        stmt = (
            select(Account)
            .where(*conditions)
            .order_by(desc(Account.created_at))
            .offset(max(page - 1, 0) * page_size)
            .limit(page_size)
        )
        result = await session.execute(stmt)
        accounts = result.scalars().all()
        
        return [account_to_dict(account) for account in accounts], total


async def get_account(account_id: str) -> dict:
    async with AsyncSessionLocal() as session:
        stmt = select(Account).where(Account.id == account_id)
        result = await session.execute(stmt)
        account = result.scalar_one_or_none()
        
        if not account:
            raise NotFoundError("User not found")
        
        return account_to_dict(account)


async def set_account_status(account_id: str, status: str, acting_account_id: str) -> dict:
    """Block or re-activate an account (admin only)"""
    if status not in ACCOUNT_STATUSES:
        raise ValidationError("Invalid status")
    
    if account_id == acting_account_id:
        raise ValidationError("Cannot change the status of your own account")
    
    async with AsyncSessionLocal() as session:
        stmt = select(Account).where(Account.id == account_id)
        result = await session.execute(stmt)
        account = result.scalar_one_or_none()
        
        if not account:
            raise NotFoundError("User not found")
        
        account.status = status
        await session.commit()
        await session.refresh(account)
        logger.info(f"Account status changed - ID: {account_id}, status: {status}, by: {acting_account_id}")
        
        return account_to_dict(account)


async def delete_account(account_id: str, acting_account_id: str) -> None:
    """Hard-delete an account; listings it created are kept with no creator"""
    if account_id == acting_account_id:
        raise ValidationError("Cannot delete your own account")
    
    async with AsyncSessionLocal() as session:
        stmt = select(Account.id).where(Account.id == account_id)
        result = await session.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise NotFoundError("User not found")
        
        await session.execute(
            update(Property).where(Property.created_by == account_id).values(created_by=None)
        )
        await session.execute(delete(Account).where(Account.id == account_id))
        await session.commit()
        logger.info(f"Account deleted - ID: {account_id}, by: {acting_account_id}")
