"""Claude API fallback extractor."""

from __future__ import annotations

from ..config import ScoringWeights
from ..models import PartialOrder
from . import PROMPT, FallbackExtractor, parse_response


class ClaudeFallbackExtractor(FallbackExtractor):
    """Extract orders from pasted text using Claude."""

    def __init__(
        self,
        api_key: str = "",
        model: str = "claude-sonnet-4-5-20250929",
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
                "API key Anthropic belum dikonfigurasi. "
                "Periksa file konfigurasi atau variabel lingkungan ANTHROPIC_API_KEY."
            )

        try:
            import anthropic
        except ImportError:
            raise ImportError(
                "anthropic SDK is required: pip install anthropic"
            ) from None

        client = anthropic.AsyncAnthropic(api_key=self._api_key, timeout=self._timeout)
        response = await client.messages.create(
            model=self._model,
            max_tokens=4096,
            temperature=0.1,
            messages=[{"role": "user", "content": PROMPT + raw_text}],
        )

        text = response.content[0].text
        return parse_response(text, raw_text, self._weights)
