"""
Property Service - Listing lifecycle and moderation
Public reads only ever see approved listings; every write goes through the
moderation rules in app.services.moderation.
"""
import logging
import uuid
from decimal import Decimal
from typing import Optional, List, Dict, Tuple
from sqlalchemy import select, update, delete, or_, desc, func
from sqlalchemy.exc import IntegrityError
from app.database.connection import AsyncSessionLocal
from app.models.property import Property, PUBLIC_STATUS
from app.models.enquiry import Enquiry
from app.services.moderation import resolve_initial_status, check_transition, ADMIN_ROLE
from app.utils.exceptions import ConflictError, NotFoundError, ValidationError
from app.utils.slugs import slugify

logger = logging.getLogger(__name__)

# Columns that may not be cleared by an update
REQUIRED_FIELDS = {
    "title", "slug", "price", "property_type", "status", "location",
    "features", "images", "premium", "owner_contact",
}


def property_to_dict(prop: Property) -> Dict:
    return {
        "id": prop.id,
        "title": prop.title,
        "slug": prop.slug,
        "price": float(prop.price) if prop.price is not None else 0.0,
        "property_type": prop.property_type,
        "status": prop.status,
        "location": prop.location,
        "city": prop.city,
        "area": prop.area,
        "bedrooms": prop.bedrooms,
        "bathrooms": prop.bathrooms,
        "features": prop.features or [],
        "description": prop.description,
        "images": prop.images or [],
        "cover_image": prop.cover_image,
        "premium": bool(prop.premium),
        "owner_contact": prop.owner_contact,
        "created_by": prop.created_by,
        "created_at": prop.created_at.isoformat() if prop.created_at else "",
        "updated_at": prop.updated_at.isoformat() if prop.updated_at else "",
    }


def _build_filters(
    search: Optional[str] = None,
    property_type: Optional[str] = None,
    city: Optional[str] = None,
    premium: Optional[bool] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    bedrooms: Optional[int] = None,
) -> list:
    conditions = []

    if search:
        search_pattern = f"%{search}%"
        conditions.append(
            or_(
                Property.title.ilike(search_pattern),
                Property.location.ilike(search_pattern),
                Property.city.ilike(search_pattern),
            )
        )

    if property_type:
        conditions.append(Property.property_type == property_type)

    if city:
        conditions.append(Property.city.ilike(f"%{city}%"))

    if premium is not None:
        conditions.append(Property.premium == premium)

    if min_price is not None:
        conditions.append(Property.price >= Decimal(str(min_price)))

    if max_price is not None:
        conditions.append(Property.price <= Decimal(str(max_price)))

    if bedrooms is not None:
        conditions.append(Property.bedrooms == bedrooms)

    return conditions


async def _paginate(conditions: list, page: int, page_size: int) -> Tuple[List[Dict], int]:
    """Run a filtered listing query, latest first. Returns (items, total)."""
    async with AsyncSessionLocal() as session:
        count_stmt = select(func.count()).select_from(Property).where(*conditions)
        total_result = await session.execute(count_stmt)
        total = total_result.scalar_one() or 0

        stmt = (
            select(Property)
            .where(*conditions)
            .order_by(desc(Property.created_at))
            .offset(max(page - 1, 0) * page_size)
            .limit(page_size)
        )
        result = await session.execute(stmt)
        props = result.scalars().all()

        return [property_to_dict(prop) for prop in props], total


async def create_property(account_id: str, role: str, property_data: Dict) -> Dict:
    """Create a listing. Non-admins always start in draft."""
    status = resolve_initial_status(role, property_data.get("status"))

    slug = property_data.get("slug") or slugify(property_data.get("title", ""))
    if not slug:
        raise ValidationError("A slug could not be derived from the title")

    async with AsyncSessionLocal() as session:
        new_property = Property(
            id=str(uuid.uuid4()),
            title=property_data["title"],
            slug=slug,
            price=Decimal(str(property_data["price"])),
            property_type=property_data["property_type"],
            status=status,
            location=property_data["location"],
            city=property_data.get("city"),
            area=property_data.get("area"),
            bedrooms=property_data.get("bedrooms"),
            bathrooms=property_data.get("bathrooms"),
            features=property_data.get("features") or [],
            description=property_data.get("description"),
            images=property_data.get("images") or [],
            cover_image=property_data.get("cover_image"),
            premium=bool(property_data.get("premium", False)),
            owner_contact=property_data["owner_contact"],
            created_by=account_id,
        )
        session.add(new_property)

        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise ConflictError("Slug already used")

        await session.refresh(new_property)
        logger.info(f"Property created - ID: {new_property.id}, slug: {slug}, status: {status}, by: {account_id}")

        return property_to_dict(new_property)


async def list_public_properties(
    search: Optional[str] = None,
    property_type: Optional[str] = None,
    city: Optional[str] = None,
    premium: Optional[bool] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    bedrooms: Optional[int] = None,
    page: int = 1,
    page_size: int = 16,
) -> Tuple[List[Dict], int]:
    """Approved listings only; callers cannot widen the status filter"""
    conditions = [Property.status == PUBLIC_STATUS]
    conditions += _build_filters(search, property_type, city, premium, min_price, max_price, bedrooms)
    return await _paginate(conditions, page, page_size)


async def list_all_properties(
    status: Optional[str] = None,
    search: Optional[str] = None,
    property_type: Optional[str] = None,
    city: Optional[str] = None,
    premium: Optional[bool] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    bedrooms: Optional[int] = None,
    page: int = 1,
    page_size: int = 16,
) -> Tuple[List[Dict], int]:
    """Admin view: every listing, optionally narrowed to one status"""
    conditions = []
    if status:
        conditions.append(Property.status == status)
    conditions += _build_filters(search, property_type, city, premium, min_price, max_price, bedrooms)
    return await _paginate(conditions, page, page_size)


async def list_my_properties(
    account_id: str,
    status: Optional[str] = None,
    page: int = 1,
    page_size: int = 16,
) -> Tuple[List[Dict], int]:
    conditions = [Property.created_by == account_id]
    if status:
        conditions.append(Property.status == status)
    return await _paginate(conditions, page, page_size)


async def get_public_property(slug: str) -> Dict:
    """Fetch an approved listing by slug; anything else is reported as missing"""
    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(
            Property.slug == slug.lower(),
            Property.status == PUBLIC_STATUS,
        )
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        if not prop:
            raise NotFoundError("Property not found")

        return property_to_dict(prop)


async def update_property(property_id: str, update_data: Dict, role: str = ADMIN_ROLE) -> Dict:
    """
    Partial update. A slug rename is committed under the unique constraint;
    on collision the transaction is rolled back and the stored listing is left
    exactly as it was.
    """
    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(Property.id == property_id)
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        if not prop:
            raise NotFoundError("Property not found")

        if update_data.get("status") is not None:
            check_transition(role, prop.status, update_data["status"])

        for key, value in update_data.items():
            if not hasattr(prop, key):
                continue
            if value is None and key in REQUIRED_FIELDS:
                continue
            if key == "price":
                value = Decimal(str(value))
            setattr(prop, key, value)

        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise ConflictError("Slug already used")

        await session.refresh(prop)
        logger.info(f"Property updated - ID: {property_id}, fields: {sorted(update_data)}")

        return property_to_dict(prop)


async def change_property_status(property_id: str, status: str, role: str) -> Dict:
    """Move a listing to another moderation state"""
    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(Property.id == property_id)
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        if not prop:
            raise NotFoundError("Property not found")

        previous = prop.status
        check_transition(role, previous, status)

        prop.status = status
        await session.commit()
        await session.refresh(prop)
        logger.info(f"Property status changed - ID: {property_id}, {previous} -> {status}")

        return property_to_dict(prop)


async def submit_property(property_id: str, account_id: str, role: str) -> Dict:
    """Owner submits a draft (or rejected) listing for review"""
    async with AsyncSessionLocal() as session:
        stmt = select(Property).where(Property.id == property_id)
        result = await session.execute(stmt)
        prop = result.scalar_one_or_none()

        # Other people's listings are reported as missing
        if not prop or (role != ADMIN_ROLE and prop.created_by != account_id):
            raise NotFoundError("Property not found")

        previous = prop.status
        check_transition(role, previous, "pending")

        prop.status = "pending"
        await session.commit()
        await session.refresh(prop)
        logger.info(f"Property submitted for review - ID: {property_id}, {previous} -> pending")

        return property_to_dict(prop)


async def delete_property(property_id: str) -> None:
    async with AsyncSessionLocal() as session:
        stmt = select(Property.id).where(Property.id == property_id)
        result = await session.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise NotFoundError("Property not found")

        # Keep enquiries about the listing, just drop the reference
        await session.execute(
            update(Enquiry).where(Enquiry.property_id == property_id).values(property_id=None)
        )
        await session.execute(delete(Property).where(Property.id == property_id))
        await session.commit()
        logger.info(f"Property deleted - ID: {property_id}")
