# signups.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from merchlab.dependencies import get_store
from merchlab.errors import ValidationError
from merchlab.store import DesignStore

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Signups"])


class SignupRequest(BaseModel):
    email: Optional[str] = None


@router.post("/signup", summary="Join the mailing list")
async def signup(payload: SignupRequest, store: DesignStore = Depends(get_store)):
    """Stores the email address. Signing up again with the same address still succeeds."""
    if not payload.email or not payload.email.strip():
        raise ValidationError("Email required")

    created = await store.create_signup(payload.email)
    if not created:
        logger.info("Signup for an address already on the list; nothing stored.")
    return {"success": "Signed up"}
