import uuid as uuid_mod
import os
from typing import Optional

from fastapi import APIRouter, UploadFile, File, HTTPException, status, Form
from fastapi.responses import JSONResponse

from core.imagekit_client import decode_base64_image, upload_item_image, validate_image_bytes

router = APIRouter()

ALLOWED_EXTS = {"jpg", "jpeg", "png", "gif", "webp", "heic", "heif"}


@router.post("/upload")
async def upload_image(
    file: Optional[UploadFile] = File(None),
    base64_image: Optional[str] = Form(None),
):
    """
    Upload an item picture to image storage.
    Accepts either a file upload or base64 encoded image.
    Returns the public URL to store in the item's image_url.
    """
    if file:
        file_data = await file.read()
        filename = file.filename or f"item_{uuid_mod.uuid4().hex[:8]}.jpg"

        content_type = (file.content_type or "").strip().lower()
        ext = os.path.splitext(filename)[1].lower().lstrip(".")
        if content_type and content_type != "application/octet-stream" and not content_type.startswith("image/"):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File must be an image")
        if (not content_type or content_type == "application/octet-stream") and ext and ext not in ALLOWED_EXTS:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="File must be an image")
    elif base64_image:
        try:
            file_data = decode_base64_image(base64_image)
        except ValueError:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid base64 image")
        filename = f"item_{uuid_mod.uuid4().hex[:8]}.jpg"
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either 'file' or 'base64_image' must be provided",
        )

    try:
        validate_image_bytes(file_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    url = await upload_item_image(file_data, filename)
    return JSONResponse(content={"url": url, "name": filename})
