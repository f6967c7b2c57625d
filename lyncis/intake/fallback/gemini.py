"""Gemini API fallback extractor."""

from __future__ import annotations

from ..config import ScoringWeights
from ..models import PartialOrder
from . import PROMPT, FallbackExtractor, parse_response


class GeminiFallbackExtractor(FallbackExtractor):
    """Extract orders from pasted text using Google Gemini."""

    def __init__(
        self,
        api_key: str = "",
        model: str = "gemini-2.0-flash",
        timeout: float = 30.0,
        weights: ScoringWeights | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._weights = weights

    async def extract(self, raw_text: str) -> list[PartialOrder]:
        if not self._api_key:
            raise ValueError(
                "API key Gemini belum dikonfigurasi. "
                "Periksa file konfigurasi atau variabel lingkungan GEMINI_API_KEY."
            )

        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai SDK is required: pip install google-generativeai"
            ) from None

        genai.configure(api_key=self._api_key)
        model = genai.GenerativeModel(self._model)

        response = await model.generate_content_async(
            PROMPT + raw_text,
            generation_config={
                "temperature": 0.1,
                "response_mime_type": "application/json",
            },
            request_options={"timeout": self._timeout},
        )
        return parse_response(response.text, raw_text, self._weights)
