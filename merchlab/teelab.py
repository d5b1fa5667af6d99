# teelab.py
"""
TeeLab: community t-shirt designs.

Handles:
- Design uploads (image saved under the upload directory, row in `designs`)
- Likes (one vote per call, no per-user dedup)
- The gallery, most voted first
"""

import os
import uuid
import shutil
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import BaseModel

from merchlab.dependencies import get_settings, get_store
from merchlab.errors import StorageError, ValidationError
from merchlab.recommendations import is_blank
from merchlab.settings import Settings
from merchlab.store import DesignStore

log = logging.getLogger(__name__)
router = APIRouter(tags=["TeeLab"])

# Public path the upload directory is mounted under (see server.py).
UPLOADS_PATH = "/uploads"


# ===================================================================
# SCHEMAS
# ===================================================================

class DesignOut(BaseModel):
    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    user_id: Optional[int] = None
    votes: int = 0

    class Config:
        from_attributes = True


# ===================================================================
# UPLOAD UTILITIES
# ===================================================================

def parse_user_id(user_id: Optional[str]) -> Optional[int]:
    """Blank means anonymous; anything else has to be an integer."""
    if user_id is None or not user_id.strip():
        return None
    try:
        return int(user_id)
    except ValueError:
        raise ValidationError("user_id must be an integer", details={"user_id": user_id})


def save_upload(upload: UploadFile, upload_dir: str) -> str:
    """
    Writes the uploaded file under a random name and returns that name.

    Raises:
        ValidationError: If the file cannot be written.
    """
    extension = os.path.splitext(upload.filename or "")[1]
    filename = f"{uuid.uuid4().hex}{extension}"
    file_path = os.path.join(upload_dir, filename)

    try:
        # Write the file chunk by chunk for large files
        with open(file_path, "wb") as buffer:
            shutil.copyfileobj(upload.file, buffer)
    except OSError as e:
        log.error(f"File upload failed: {e}")
        raise ValidationError("Upload failed", details={"error": str(e)})
    return filename


# ===================================================================
# ENDPOINTS
# ===================================================================

@router.post("/teelab", summary="Upload a design")
async def upload_design(
    title: Optional[str] = Form(None),
    desc: Optional[str] = Form(None),
    user_id: Optional[str] = Form(None),
    design: Optional[UploadFile] = File(None),
    store: DesignStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """
    Accepts a multipart form with `title`, `desc`, an optional `user_id` and
    the image in the `design` field. The image is served back from
    `/uploads/<generated name>`.
    """
    try:
        if is_blank(title) or is_blank(desc) or design is None or not design.filename:
            raise ValidationError(details={
                "title": not is_blank(title),
                "desc": not is_blank(desc),
                "design": design is not None,
            })
        owner = parse_user_id(user_id)

        filename = save_upload(design, settings.UPLOAD_DIR)
    finally:
        if design is not None:
            await design.close()

    image_url = f"{UPLOADS_PATH}/{filename}"
    try:
        await store.create_design(title, desc, image_url, owner)
    except StorageError:
        # Don't leave an image behind that no design points to.
        os.remove(os.path.join(settings.UPLOAD_DIR, filename))
        raise

    return {"success": "Design uploaded"}


@router.post("/like/{design_id}", summary="Vote for a design")
async def like_design(design_id: int, store: DesignStore = Depends(get_store)):
    """Adds one vote. Liking an id that doesn't exist is accepted and changes nothing."""
    await store.increment_vote(design_id)
    return {"success": "Liked"}


@router.get("/teelab/designs", response_model=List[DesignOut], summary="Design gallery")
async def list_designs(store: DesignStore = Depends(get_store)):
    """All designs, most voted first."""
    return await store.list_designs()
