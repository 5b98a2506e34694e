from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from typing import List
from starlette.concurrency import run_in_threadpool
from app.config import settings
from app.schemas.upload import ImageUploadResponse
from app.services.storage_service import upload_images, delete_image
from app.utils.dependencies import TokenClaims, get_current_claims, require_admin

router = APIRouter(prefix="/uploads", tags=["Uploads"])


async def read_upload(file: UploadFile) -> bytes:
    """Read at most one byte past the size limit so oversized files fail validation"""
    return await file.read(settings.max_upload_size_bytes + 1)


@router.post("/images", response_model=ImageUploadResponse, status_code=status.HTTP_201_CREATED)
async def upload_images_endpoint(
    files: List[UploadFile] = File(...),
    claims: TokenClaims = Depends(get_current_claims)
):
    """Upload listing images; either every file is stored or none is"""
    batch = [(await read_upload(file), file.filename or "") for file in files]
    # The Cloudinary SDK is blocking
    urls = await run_in_threadpool(upload_images, batch)
    return ImageUploadResponse(urls=urls)


@router.delete("/images", status_code=status.HTTP_204_NO_CONTENT)
async def delete_image_endpoint(
    url: str = Query(..., min_length=1),
    claims: TokenClaims = Depends(require_admin)
):
    """Remove an uploaded image (Admin only)"""
    await run_in_threadpool(delete_image, url)
