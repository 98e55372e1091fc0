"""Try-on workflow."""

from .tryon_session import TryOnSession, download_filename

__all__ = ["TryOnSession", "download_filename"]
