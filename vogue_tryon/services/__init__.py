"""External services and input handling."""

from .gemini_client import GeminiImageGenerator, ImageGenerator, extract_result
from .image_intake import load_image_asset, load_image_file

__all__ = [
    "GeminiImageGenerator",
    "ImageGenerator",
    "extract_result",
    "load_image_asset",
    "load_image_file",
]
