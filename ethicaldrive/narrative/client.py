"""
Async client for an Ollama-compatible text-generation service.

Only the non-streaming /api/generate endpoint is used, always with
format=json so every flow gets a structured object back.
"""
import json
from typing import Any, Dict, List, Optional

import httpx

from ethicaldrive.config import Settings


class NarrativeError(Exception):
    """Raised when the text-generation service fails or returns garbage"""
    pass


class NarrativeClient:

    def __init__(
        self,
        base_url: str,
        model: str,
        vision_model: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.vision_model = vision_model
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @classmethod
    def from_settings(cls, settings: Settings) -> "NarrativeClient":
        return cls(
            base_url=settings.narrative_url,
            model=settings.narrative_model,
            vision_model=settings.vision_model,
            timeout=settings.narrative_timeout,
        )

    async def __aenter__(self) -> "NarrativeClient":
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def generate(
        self,
        prompt: str,
        images: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Run one prompt and return the model's JSON object.

        Args:
            prompt: Full prompt text
            images: Base64 images; switches to the vision model when given

        Raises:
            NarrativeError on transport errors, non-2xx status or a
            response that is not a JSON object
        """
        if self._client is None:
            raise NarrativeError("Client is not open; use 'async with'")

        payload: Dict[str, Any] = {
            "model": self.vision_model if images else self.model,
            "prompt": prompt,
            "stream": False,
            "format": "json",
        }
        if images:
            payload["images"] = images

        try:
            response = await self._client.post("/api/generate", json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NarrativeError(
                f"Text-generation service returned {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise NarrativeError(f"Text-generation service unreachable: {e}") from e

        try:
            text = response.json().get("response", "")
            result = json.loads(text)
        except (ValueError, TypeError, AttributeError) as e:
            raise NarrativeError("Text-generation service returned invalid JSON") from e

        if not isinstance(result, dict):
            raise NarrativeError("Expected a JSON object from the model")
        return result
