"""Generation request/result models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from ..utils.data_uri import decode_data_uri
from .image import ImageSummary


class ProcessingStatus(str, Enum):
    IDLE = "idle"
    GENERATING = "generating"
    SUCCESS = "success"
    ERROR = "error"


class InlineImage(BaseModel):
    """Decoded image payload as sent to the model."""
    media_type: str
    data: bytes


class GenerationRequest(BaseModel):
    """Prompt plus the two image payloads for one generation attempt."""

    prompt: str
    subject: InlineImage  # image 1, the person
    garment: InlineImage  # image 2, the outfit
    instructions: str | None = None


class GenerationResult(BaseModel):
    """Generated try-on image."""

    image_data_uri: str = Field(description="data:image/png;base64,<payload>")
    prompt_used: str = ""
    created_at: datetime = Field(default_factory=datetime.now)

    def to_png_bytes(self) -> bytes:
        return decode_data_uri(self.image_data_uri)


class SessionSnapshot(BaseModel):
    """Serialisable view of a try-on session."""

    session_id: str
    status: ProcessingStatus
    subject: ImageSummary | None = None
    garment: ImageSummary | None = None
    instructions: str | None = None
    result: GenerationResult | None = None
    error: str | None = None
    can_generate: bool = False
