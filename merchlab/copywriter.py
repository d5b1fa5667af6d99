# copywriter.py
"""
Gift message generation with Gemini.

Thin wrapper over the google-genai SDK: one prompt in, the model's text out.
"""

import logging
from typing import Optional

from google import genai  # Gemini API

from merchlab.errors import UpstreamError
from merchlab.settings import Settings

log = logging.getLogger(__name__)


def gift_message_prompt(relationship: str, vibe: str) -> str:
    return f"Write a short gift message for a {relationship} with a {vibe} vibe."


class GeminiCopywriter:
    """Generates short marketing text with a Gemini text model."""

    def __init__(self, app_settings: Settings, client: Optional[genai.Client] = None):
        self.model = app_settings.GEMINI_MODEL
        self._client = client or genai.Client(api_key=app_settings.GEMINI_API_KEY)

    async def generate(self, prompt: str) -> str:
        """
        Sends ``prompt`` to the model once and returns its text verbatim.

        Raises:
            UpstreamError: If the call fails or the model returns no text
                (for example when the answer was blocked).
        """
        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except Exception as e:
            raise UpstreamError(
                "Failed to fetch suggestions",
                error=e,
                details={"source": "gemini", "model": self.model},
            ) from e

        text = response.text
        if not text:
            raise UpstreamError(
                "Failed to fetch suggestions",
                details={"source": "gemini", "model": self.model, "error": "empty response"},
            )
        return text
