"""Uploaded image models."""

from pydantic import BaseModel, ConfigDict, Field

from ..utils.data_uri import decode_data_uri, media_type_of


class ImageAsset(BaseModel):
    """An uploaded image held in memory with its encoded and displayable forms."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Opaque identifier assigned at intake")
    data_uri: str = Field(description="data:<media type>;base64,<payload>")
    preview_url: str = Field(description="Display handle for the browser, same as data_uri")
    filename: str | None = None
    content_type: str

    @property
    def media_type(self) -> str:
        return media_type_of(self.data_uri, default=self.content_type)

    def to_bytes(self) -> bytes:
        """Decode the payload back to the original file bytes."""
        return decode_data_uri(self.data_uri)

    def summary(self) -> "ImageSummary":
        return ImageSummary(
            id=self.id,
            filename=self.filename,
            content_type=self.content_type,
            preview_url=self.preview_url,
        )


class ImageSummary(BaseModel):
    """What the browser needs to show a held image."""

    id: str
    filename: str | None = None
    content_type: str
    preview_url: str
