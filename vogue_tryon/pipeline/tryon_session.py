"""Try-on session - tracks the held images and the generate workflow."""

import asyncio
import logging
import time
import uuid

from ..agents import TryOnPromptComposer
from ..errors import (
    GenerationInProgress,
    NoResultAvailable,
    SessionNotReady,
    TryOnError,
)
from ..models import GenerationResult, ImageAsset, ProcessingStatus, SessionSnapshot
from ..services import ImageGenerator


logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_PREFIX = "vogue-ai-tryon"


def download_filename(prefix: str = DEFAULT_DOWNLOAD_PREFIX, timestamp_ms: int | None = None) -> str:
    """Name for a downloaded result, e.g. ``vogue-ai-tryon-1718000000000.png``."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{prefix}-{timestamp_ms}.png"


class TryOnSession:
    """State machine for one user's try-on workflow.

    Flow:
    1. select_subject / select_garment hold the two images (any state)
    2. generate: idle|success|error -> generating -> success|error
    3. regenerate repeats generate with the held images
    4. reset clears everything back to idle

    Only one attempt is in flight at a time. An attempt that is still running
    when the session is reset is superseded and its outcome is dropped.
    """

    def __init__(
        self,
        generator: ImageGenerator,
        composer: TryOnPromptComposer | None = None,
        download_prefix: str = DEFAULT_DOWNLOAD_PREFIX,
        session_id: str | None = None,
    ):
        self.generator = generator
        self.composer = composer or TryOnPromptComposer()
        self.download_prefix = download_prefix
        self.session_id = session_id or uuid.uuid4().hex

        self.status = ProcessingStatus.IDLE
        self.subject: ImageAsset | None = None
        self.garment: ImageAsset | None = None
        self.instructions: str | None = None
        self.result: GenerationResult | None = None
        self.error: str | None = None

        # Bumped by reset and every new attempt; stale completions are ignored
        self._attempt = 0

    @property
    def can_generate(self) -> bool:
        return (
            self.subject is not None
            and self.garment is not None
            and self.status != ProcessingStatus.GENERATING
        )

    def select_subject(self, asset: ImageAsset | None) -> None:
        """Hold (or with None, remove) the person image."""
        self.subject = asset

    def select_garment(self, asset: ImageAsset | None) -> None:
        """Hold (or with None, remove) the outfit image."""
        self.garment = asset

    async def generate(self, instructions: str | None = None) -> GenerationResult | None:
        """Run one try-on attempt with the held images.

        Args:
            instructions: Optional styling text for the final prompt requirement

        Returns:
            The new result on success, None when the attempt failed or was
            superseded (see ``status`` and ``error``)

        Raises:
            GenerationInProgress: an attempt is already running
            SessionNotReady: the person or outfit image is missing
        """
        if self.status == ProcessingStatus.GENERATING:
            raise GenerationInProgress(f"Session {self.session_id} is already generating")
        if self.subject is None or self.garment is None:
            raise SessionNotReady("Both a person image and an outfit image are required")

        subject, garment = self.subject, self.garment
        self._attempt += 1
        attempt = self._attempt
        self.instructions = instructions
        self.status = ProcessingStatus.GENERATING
        self.error = None
        logger.info("Session %s: generating (attempt %d)", self.session_id, attempt)

        try:
            request = self.composer.compose(subject, garment, instructions)
            result = await self.generator.generate(request)
        except asyncio.CancelledError:
            self._fail(attempt, "Generation was cancelled.")
            raise
        except TryOnError as e:
            self._fail(attempt, e.user_message)
            return None
        except Exception as e:
            logger.exception("Session %s: generation failed unexpectedly", self.session_id)
            self._fail(attempt, str(e) or TryOnError.default_message)
            return None

        if attempt != self._attempt:
            logger.info("Session %s: dropping superseded attempt %d", self.session_id, attempt)
            return None

        self.result = result
        self.status = ProcessingStatus.SUCCESS
        logger.info("Session %s: generation succeeded", self.session_id)
        return result

    async def regenerate(self) -> GenerationResult | None:
        """Try again with the same images and styling text."""
        return await self.generate(self.instructions)

    def reset(self) -> None:
        """Clear images, result and error and go back to idle."""
        self._attempt += 1
        self.subject = None
        self.garment = None
        self.instructions = None
        self.result = None
        self.error = None
        self.status = ProcessingStatus.IDLE
        logger.debug("Session %s: reset", self.session_id)

    def download(self) -> tuple[str, bytes]:
        """Return ``(filename, png_bytes)`` for the held result."""
        if self.result is None:
            raise NoResultAvailable("No generated image to download")
        return download_filename(self.download_prefix), self.result.to_png_bytes()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            session_id=self.session_id,
            status=self.status,
            subject=self.subject.summary() if self.subject else None,
            garment=self.garment.summary() if self.garment else None,
            instructions=self.instructions,
            result=self.result,
            error=self.error,
            can_generate=self.can_generate,
        )

    def _fail(self, attempt: int, message: str) -> None:
        if attempt != self._attempt:
            logger.info("Session %s: dropping superseded failure: %s", self.session_id, message)
            return
        self.error = message
        self.status = ProcessingStatus.ERROR
        logger.warning("Session %s: generation failed: %s", self.session_id, message)
