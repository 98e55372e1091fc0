# Test fixtures and configuration
import pytest
import sys
from pathlib import Path
from types import SimpleNamespace

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from vogue_tryon.errors import TryOnError
from vogue_tryon.models import GenerationResult
from vogue_tryon.services.image_intake import build_image_asset


MINIMAL_PNG = bytes([
    0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A,  # PNG signature
    0x00, 0x00, 0x00, 0x0D, 0x49, 0x48, 0x44, 0x52,  # IHDR chunk
    0x00, 0x00, 0x00, 0x01, 0x00, 0x00, 0x00, 0x01,  # 1x1 dimensions
    0x08, 0x02, 0x00, 0x00, 0x00, 0x90, 0x77, 0x53,
    0xDE, 0x00, 0x00, 0x00, 0x0C, 0x49, 0x44, 0x41,  # IDAT chunk
    0x54, 0x08, 0xD7, 0x63, 0xF8, 0xCF, 0xC0, 0x00,
    0x00, 0x00, 0x03, 0x00, 0x01, 0x00, 0x05, 0xFE,
    0xD4, 0xAA, 0x00, 0x00, 0x00, 0x00, 0x49, 0x45,  # IEND chunk
    0x4E, 0x44, 0xAE, 0x42, 0x60, 0x82
])


class FakeUpload:
    """Stand-in for FastAPI's UploadFile."""

    def __init__(self, data: bytes, content_type: str | None, filename: str = "upload.png"):
        self._data = data
        self.content_type = content_type
        self.filename = filename
        self.reads = 0

    async def read(self) -> bytes:
        self.reads += 1
        return self._data


class FakeGenerator:
    """Records requests; returns a fixed result or raises a fixed error."""

    def __init__(self, result: GenerationResult | None = None, error: Exception | None = None):
        self.result = result
        self.error = error
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


def make_response(*parts, candidates=True):
    """Build an object shaped like a google-genai GenerateContentResponse."""
    if not candidates:
        return SimpleNamespace(candidates=[])
    return SimpleNamespace(candidates=[
        SimpleNamespace(content=SimpleNamespace(parts=list(parts)))
    ])


def image_part(data: bytes, mime_type: str = "image/png"):
    return SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))


def text_part(text: str):
    return SimpleNamespace(text=text, inline_data=None)


@pytest.fixture
def minimal_png_bytes():
    """Minimal valid PNG image bytes."""
    return MINIMAL_PNG


@pytest.fixture
def temp_image_file(tmp_path, minimal_png_bytes):
    """Create a temporary PNG file."""
    img_path = tmp_path / "subject.png"
    img_path.write_bytes(minimal_png_bytes)
    return img_path


@pytest.fixture
def subject_asset(minimal_png_bytes):
    return build_image_asset(minimal_png_bytes, "image/png", "subject.png")


@pytest.fixture
def garment_asset():
    return build_image_asset(b"\xff\xd8\xff\xe0fake-jpeg", "image/jpeg", "outfit.jpg")


@pytest.fixture
def png_result(minimal_png_bytes):
    import base64
    return GenerationResult(
        image_data_uri=f"data:image/png;base64,{base64.b64encode(minimal_png_bytes).decode()}",
        prompt_used="prompt",
    )


@pytest.fixture
def fake_generator(png_result):
    return FakeGenerator(result=png_result)


@pytest.fixture
def failing_generator():
    return FakeGenerator(error=TryOnError("boom"))
