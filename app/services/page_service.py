"""
Page Service - Static content pages (about, contact, terms, ...)
"""
import logging
import uuid
from typing import Optional, List, Dict
from sqlalchemy import select, delete, desc
from sqlalchemy.exc import IntegrityError
from app.database.connection import AsyncSessionLocal
from app.models.page import Page
from app.utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def page_to_dict(page: Page) -> Dict:
    return {
        "id": page.id,
        "slug": page.slug,
        "title": page.title,
        "content": page.content or "",
        "meta_title": page.meta_title,
        "meta_description": page.meta_description,
        "created_at": page.created_at.isoformat() if page.created_at else "",
        "updated_at": page.updated_at.isoformat() if page.updated_at else "",
    }


async def get_page(slug: str) -> Dict:
    async with AsyncSessionLocal() as session:
        stmt = select(Page).where(Page.slug == slug.lower())
        result = await session.execute(stmt)
        page = result.scalar_one_or_none()
        
        if not page:
            raise NotFoundError("Page not found")
        
        return page_to_dict(page)


async def list_pages() -> List[Dict]:
    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Page).order_by(desc(Page.updated_at)))
        return [page_to_dict(page) for page in result.scalars().all()]


async def create_page(
    slug: str,
    title: str,
    content: str = "",
    meta_title: Optional[str] = None,
    meta_description: Optional[str] = None
) -> Dict:
    """Strict create; an existing slug is a conflict, never an overwrite"""
    async with AsyncSessionLocal() as session:
        new_page = Page(
            id=str(uuid.uuid4()),
            slug=slug.lower(),
            title=title,
            content=content or "",
            meta_title=meta_title,
            meta_description=meta_description,
        )
        session.add(new_page)
        
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            raise ConflictError("Slug already exists")
        
        await session.refresh(new_page)
        logger.info(f"Page created - slug: {new_page.slug}")
        
        return page_to_dict(new_page)


async def upsert_page(slug: str, page_data: Dict) -> Dict:
    """Create the page or update it in place. Repeating the call is harmless."""
    slug = slug.lower()
    
    async with AsyncSessionLocal() as session:
        stmt = select(Page).where(Page.slug == slug)
        result = await session.execute(stmt)
        page = result.scalar_one_or_none()
        
        if page is None:
            page = Page(id=str(uuid.uuid4()), slug=slug, content="")
            session.add(page)
        
        for key, value in page_data.items():
            if key == "content" and value is None:
                continue
            setattr(page, key, value)
        
        try:
            await session.commit()
        except IntegrityError:
            # A concurrent request created the same slug first; apply on top of it
            await session.rollback()
            return await upsert_page(slug, page_data)
        
        await session.refresh(page)
        logger.info(f"Page saved - slug: {slug}")
        
        return page_to_dict(page)


async def delete_page(slug: str) -> None:
    async with AsyncSessionLocal() as session:
        result = await session.execute(delete(Page).where(Page.slug == slug.lower()))
        
        if result.rowcount == 0:
            await session.rollback()
            raise NotFoundError("Page not found")
        
        await session.commit()
        logger.info(f"Page deleted - slug: {slug}")
