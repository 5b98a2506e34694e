"""
Enquiry Service - Leads submitted from the public site
Anyone can create an enquiry; reading and updating them is admin work.
"""
import logging
import uuid
from typing import Optional, List, Dict, Tuple
from sqlalchemy import select, delete, desc, func
from app.database.connection import AsyncSessionLocal
from app.models.enquiry import Enquiry, ENQUIRY_STATUSES
from app.models.property import Property, PUBLIC_STATUS
from app.utils.exceptions import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def enquiry_to_dict(enquiry: Enquiry, prop: Optional[Property] = None) -> Dict:
    return {
        "id": enquiry.id,
        "name": enquiry.name,
        "email": enquiry.email,
        "phone": enquiry.phone,
        "message": enquiry.message,
        "property_id": enquiry.property_id,
        "property": {"id": prop.id, "title": prop.title, "slug": prop.slug} if prop else None,
        "status": enquiry.status,
        "created_at": enquiry.created_at.isoformat() if enquiry.created_at else "",
        "updated_at": enquiry.updated_at.isoformat() if enquiry.updated_at else "",
    }


def _with_property():
    return select(Enquiry, Property).outerjoin(Property, Enquiry.property_id == Property.id)


async def create_enquiry(
    name: str,
    phone: str,
    message: str,
    email: Optional[str] = None,
    property_id: Optional[str] = None
) -> Dict:
    """Store a public enquiry, optionally about a published listing"""
    async with AsyncSessionLocal() as session:
        prop = None
        if property_id:
            prop = await session.get(Property, property_id)
            if not prop or prop.status != PUBLIC_STATUS:
                raise ValidationError("Unknown property")
        
        new_enquiry = Enquiry(
            id=str(uuid.uuid4()),
            name=name,
            email=email.lower() if email else None,
            phone=phone,
            message=message,
            property_id=property_id or None,
            status="new",
        )
        session.add(new_enquiry)
        await session.commit()
        await session.refresh(new_enquiry)
        logger.info(f"Enquiry created - ID: {new_enquiry.id}, property: {property_id}")
        
        return enquiry_to_dict(new_enquiry, prop)


async def list_enquiries(
    status: Optional[str] = None,
    property_id: Optional[str] = None,
    page: int = 1,
    page_size: int = 20,
) -> Tuple[List[Dict], int]:
    """Enquiries, latest first. Returns (items, total)."""
    async with AsyncSessionLocal() as session:
        conditions = []
        if status:
            conditions.append(Enquiry.status == status)
        if property_id:
            conditions.append(Enquiry.property_id == property_id)
        
        count_stmt = select(func.count()).select_from(Enquiry).where(*conditions)
        total_result = await session.execute(count_stmt)
        total = total_result.scalar_one() or 0
        
        stmt = (
            _with_property()
            .where(*conditions)
            .order_by(desc(Enquiry.created_at))
            .offset(max(page - 1, 0) * page_size)
            .limit(page_size)
        )
        result = await session.execute(stmt)
        
        return [enquiry_to_dict(enquiry, prop) for enquiry, prop in result.all()], total


async def get_enquiry(enquiry_id: str) -> Dict:
    async with AsyncSessionLocal() as session:
        result = await session.execute(_with_property().where(Enquiry.id == enquiry_id))
        row = result.first()
        
        if not row:
            raise NotFoundError("Enquiry not found")
        
        enquiry, prop = row
        return enquiry_to_dict(enquiry, prop)


async def update_enquiry_status(enquiry_id: str, status: str) -> Dict:
    if status not in ENQUIRY_STATUSES:
        raise ValidationError("Invalid status")
    
    async with AsyncSessionLocal() as session:
        enquiry = await session.get(Enquiry, enquiry_id)
        
        if not enquiry:
            raise NotFoundError("Enquiry not found")
        
        previous = enquiry.status
        enquiry.status = status
        await session.commit()
        await session.refresh(enquiry)
        logger.info(f"Enquiry status changed - ID: {enquiry_id}, {previous} -> {status}")
        
        prop = await session.get(Property, enquiry.property_id) if enquiry.property_id else None
        return enquiry_to_dict(enquiry, prop)


async def delete_enquiry(enquiry_id: str) -> None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(delete(Enquiry).where(Enquiry.id == enquiry_id))
        
        if result.rowcount == 0:
            await session.rollback()
            raise NotFoundError("Enquiry not found")
        
        await session.commit()
        logger.info(f"Enquiry deleted - ID: {enquiry_id}")
