from fastapi import APIRouter, Depends, status
from typing import List
from app.schemas.page import PageCreateRequest, PageUpsertRequest, PageResponse
from app.services.page_service import (
    get_page,
    list_pages,
    create_page,
    upsert_page,
    delete_page,
)
from app.utils.dependencies import TokenClaims, require_admin
from app.utils.exceptions import ValidationError
from app.utils.slugs import normalize_slug

router = APIRouter(prefix="/pages", tags=["Pages"])


@router.get("", response_model=List[PageResponse])
async def get_pages(claims: TokenClaims = Depends(require_admin)):
    """List all content pages (Admin only)"""
    pages = await list_pages()
    return [PageResponse(**page) for page in pages]


@router.post("", response_model=PageResponse, status_code=status.HTTP_201_CREATED)
async def create_page_endpoint(request: PageCreateRequest, claims: TokenClaims = Depends(require_admin)):
    """Create a page; fails if the slug is already taken (Admin only)"""
    page = await create_page(
        slug=request.slug,
        title=request.title,
        content=request.content,
        meta_title=request.meta_title,
        meta_description=request.meta_description,
    )
    return PageResponse(**page)


@router.get("/{slug}", response_model=PageResponse)
async def get_page_endpoint(slug: str):
    page = await get_page(slug)
    return PageResponse(**page)


@router.put("/{slug}", response_model=PageResponse)
async def upsert_page_endpoint(
    slug: str,
    request: PageUpsertRequest,
    claims: TokenClaims = Depends(require_admin)
):
    """Create or replace the page at this slug (Admin only)"""
    try:
        slug = normalize_slug(slug)
    except ValueError as e:
        raise ValidationError(str(e))

    page = await upsert_page(slug, request.model_dump())
    return PageResponse(**page)


@router.delete("/{slug}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_page_endpoint(slug: str, claims: TokenClaims = Depends(require_admin)):
    await delete_page(slug)
