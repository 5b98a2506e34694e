from sqlalchemy import select, func, case
from app.database.connection import AsyncSessionLocal
from app.models.account import Account
from app.models.property import Property, PROPERTY_STATUSES
from app.models.enquiry import Enquiry, ENQUIRY_STATUSES


def _status_counts(column, statuses):
    return [
        func.coalesce(func.sum(case((column == status, 1), else_=0)), 0).label(status)
        for status in statuses
    ]


async def get_admin_dashboard_stats() -> dict:
    """Get admin dashboard statistics using database aggregations"""
    async with AsyncSessionLocal() as session:
        property_stmt = select(
            func.count(Property.id).label("total"),
            *_status_counts(Property.status, PROPERTY_STATUSES)
        )
        property_result = await session.execute(property_stmt)
        property_stats = property_result.first()

        enquiry_stmt = select(
            func.count(Enquiry.id).label("total"),
            *_status_counts(Enquiry.status, ENQUIRY_STATUSES)
        )
        enquiry_result = await session.execute(enquiry_stmt)
        enquiry_stats = enquiry_result.first()

        account_stmt = select(
            func.count(Account.id).label("total"),
            func.coalesce(func.sum(case((Account.role == "admin", 1), else_=0)), 0).label("admins"),
            func.coalesce(func.sum(case((Account.status == "blocked", 1), else_=0)), 0).label("blocked"),
        )
        account_result = await session.execute(account_stmt)
        account_stats = account_result.first()

        return {
            "properties": {
                "total": property_stats.total or 0,
                **{status: int(getattr(property_stats, status) or 0) for status in PROPERTY_STATUSES},
            },
            "enquiries": {
                "total": enquiry_stats.total or 0,
                **{status: int(getattr(enquiry_stats, status) or 0) for status in ENQUIRY_STATUSES},
            },
            "users": {
                "total": account_stats.total or 0,
                "admins": int(account_stats.admins or 0),
                "blocked": int(account_stats.blocked or 0),
            },
        }
