"""Gemini client for virtual try-on image generation."""

import asyncio
import base64
import logging
from typing import Any, Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from ..config import GenerationConfig
from ..errors import (
    MissingCredential,
    ModelRefused,
    NoCandidates,
    NoImageData,
    TransportError,
)
from ..models import GenerationRequest, GenerationResult


logger = logging.getLogger(__name__)

OUTPUT_MEDIA_TYPE = "image/png"


class ImageGenerator(Protocol):
    """Accepts a prompt plus images and returns one generated image."""

    async def generate(self, request: GenerationRequest) -> GenerationResult: ...


def extract_result(response: Any, prompt: str = "") -> GenerationResult:
    """Pull the first inline image out of a generate_content response.

    Parts of the first candidate are scanned in order and the first one with
    inline image data wins. The payload is always labelled as PNG.
    """
    candidates = getattr(response, "candidates", None)
    if not candidates:
        raise NoCandidates()

    content = getattr(candidates[0], "content", None)
    parts = (getattr(content, "parts", None) if content is not None else None) or []

    for part in parts:
        inline_data = getattr(part, "inline_data", None)
        data = getattr(inline_data, "data", None) if inline_data is not None else None
        if data:
            # The SDK hands back raw bytes; older payloads may still be base64 text
            encoded = data if isinstance(data, str) else base64.b64encode(data).decode("ascii")
            return GenerationResult(
                image_data_uri=f"data:{OUTPUT_MEDIA_TYPE};base64,{encoded}",
                prompt_used=prompt,
            )

    text = next(
        (part.text for part in parts if (getattr(part, "text", None) or "").strip()),
        None,
    )
    if text:
        logger.warning("Model returned text instead of image: %s", text)
        raise ModelRefused(text)

    raise NoImageData()


class GeminiImageGenerator:
    """Sends try-on requests to a Gemini image model.

    The API key is passed in explicitly; nothing is read from the environment
    here.
    """

    def __init__(
        self,
        api_key: str | None,
        config: GenerationConfig | None = None,
        client: genai.Client | None = None,
    ):
        self.api_key = api_key
        self.config = config or GenerationConfig()
        self._client = client

    @property
    def client(self) -> genai.Client:
        """Get or create the SDK client."""
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def build_contents(self, request: GenerationRequest) -> types.Content:
        return types.Content(
            role="user",
            parts=[
                types.Part.from_text(text=request.prompt),
                types.Part.from_bytes(data=request.subject.data, mime_type=request.subject.media_type),
                types.Part.from_bytes(data=request.garment.data, mime_type=request.garment.media_type),
            ],
        )

    def build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            image_config=types.ImageConfig(aspect_ratio=self.config.aspect_ratio),
        )

    async def generate(self, request: GenerationRequest) -> GenerationResult:
        """Run one try-on generation.

        Raises:
            MissingCredential: no API key configured (nothing is sent)
            TransportError: the call failed or timed out
            NoCandidates, ModelRefused, NoImageData: unusable response
        """
        if not self.api_key or not self.api_key.strip():
            raise MissingCredential()

        logger.info(
            "Requesting try-on from %s (aspect %s, person %s, outfit %s)",
            self.config.model,
            self.config.aspect_ratio,
            request.subject.media_type,
            request.garment.media_type,
        )

        try:
            response = await asyncio.wait_for(
                self.client.aio.models.generate_content(
                    model=self.config.model,
                    contents=self.build_contents(request),
                    config=self.build_config(),
                ),
                timeout=self.config.timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Gemini call timed out after %ss", self.config.timeout)
            raise TransportError(
                f"The image generation service did not respond within {self.config.timeout:g}s."
            ) from e
        except (genai_errors.APIError, httpx.HTTPError, OSError) as e:
            logger.error("Gemini API error: %s", e)
            raise TransportError(str(e) or None) from e

        return extract_result(response, prompt=request.prompt)
