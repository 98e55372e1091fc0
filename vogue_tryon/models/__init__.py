"""Data models for the virtual try-on service."""

from .image import ImageAsset, ImageSummary
from .generation import (
    GenerationRequest,
    GenerationResult,
    InlineImage,
    ProcessingStatus,
    SessionSnapshot,
)

__all__ = [
    "ImageAsset",
    "ImageSummary",
    "InlineImage",
    "GenerationRequest",
    "GenerationResult",
    "ProcessingStatus",
    "SessionSnapshot",
]
