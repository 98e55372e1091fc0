"""Image intake - turns a user-selected file into an in-memory ImageAsset."""

import asyncio
import logging
import mimetypes
import uuid
from pathlib import Path
from typing import Protocol

from ..errors import InvalidMediaType
from ..models import ImageAsset
from ..utils.data_uri import encode_data_uri


logger = logging.getLogger(__name__)


class ImageSource(Protocol):
    """Anything upload-shaped: FastAPI's UploadFile fits."""

    content_type: str | None
    filename: str | None

    async def read(self) -> bytes: ...


def is_image_content_type(content_type: str | None) -> bool:
    return bool(content_type) and content_type.lower().startswith("image/")


def new_asset_id() -> str:
    return uuid.uuid4().hex[:8]


def build_image_asset(
    data: bytes,
    content_type: str | None,
    filename: str | None = None,
) -> ImageAsset:
    """Validate the declared type and wrap the bytes as a data URI asset."""
    if not is_image_content_type(content_type):
        raise InvalidMediaType(content_type)
    if not data:
        raise InvalidMediaType(content_type, message="The selected image file is empty.")

    data_uri = encode_data_uri(data, content_type)
    asset = ImageAsset(
        id=new_asset_id(),
        data_uri=data_uri,
        preview_url=data_uri,
        filename=filename,
        content_type=content_type,
    )
    logger.debug("Loaded image %s (%s, %d bytes) as asset %s", filename, content_type, len(data), asset.id)
    return asset


async def load_image_asset(source: ImageSource) -> ImageAsset:
    """Read an uploaded file into memory and encode it.

    The declared content type is checked before anything is read.
    """
    content_type = source.content_type
    if not is_image_content_type(content_type):
        raise InvalidMediaType(content_type)

    data = await source.read()
    return build_image_asset(data, content_type, source.filename)


async def load_image_file(path: Path, content_type: str | None = None) -> ImageAsset:
    """Load an image from disk, guessing the media type from its suffix."""
    if content_type is None:
        content_type, _ = mimetypes.guess_type(path.name)
    if not is_image_content_type(content_type):
        raise InvalidMediaType(content_type)

    data = await asyncio.to_thread(path.read_bytes)
    return build_image_asset(data, content_type, path.name)
