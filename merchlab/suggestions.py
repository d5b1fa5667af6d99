# suggestions.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from merchlab.catalog import ShopifyCatalog
from merchlab.copywriter import GeminiCopywriter
from merchlab.dependencies import get_catalog, get_copywriter
from merchlab.recommendations import (
    GiftSuggestions, StyleSuggestions, gift_suggestions, style_suggestions,
)

# --- Configuration & Setup ---
logger = logging.getLogger(__name__)
router = APIRouter(tags=["Suggestions"])


# --- Request bodies ---
# Every field is optional at the schema level so that a missing field is
# reported as a 400 with an error body rather than FastAPI's 422.

class GiftGenieRequest(BaseModel):
    relationship: Optional[str] = None
    vibe: Optional[str] = None
    budget: Optional[str] = None
    message: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


class StyleSuggestRequest(BaseModel):
    gender: Optional[str] = None
    skin_tone: Optional[str] = None
    body_type: Optional[str] = None

    class Config:
        coerce_numbers_to_str = True


# --- API Endpoints ---

@router.post("/giftgenie", response_model=GiftSuggestions, summary="Gift ideas within a budget")
async def giftgenie(
    payload: GiftGenieRequest,
    catalog: ShopifyCatalog = Depends(get_catalog),
    copywriter: GeminiCopywriter = Depends(get_copywriter),
):
    """
    Suggests up to five products tagged with the requested vibe that cost no
    more than the budget, along with a gift message. The caller's own message
    is echoed back; without one, Gemini writes it.
    """
    return await gift_suggestions(
        catalog,
        copywriter,
        relationship=payload.relationship,
        vibe=payload.vibe,
        budget=payload.budget,
        message=payload.message,
    )


@router.post("/stylesuggest", response_model=StyleSuggestions, summary="Outfit ideas for a shopper profile")
async def stylesuggest(
    payload: StyleSuggestRequest,
    catalog: ShopifyCatalog = Depends(get_catalog),
):
    """Suggests up to five products tagged for the shopper's gender, skin tone and body type."""
    return await style_suggestions(
        catalog,
        gender=payload.gender,
        skin_tone=payload.skin_tone,
        body_type=payload.body_type,
    )
