"""FastAPI server for Virtual Try-On.

Backs the browser front-end with:
- per-session endpoints to upload the person and outfit photos, generate,
  regenerate, reset and download the result
- a stateless /api/tryon endpoint taking two base64 data URLs
"""

import logging
from collections import OrderedDict

from fastapi import FastAPI, File, HTTPException, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from vogue_tryon import __version__
from vogue_tryon.agents import TryOnPromptComposer
from vogue_tryon.config import AppConfig, load_config
from vogue_tryon.errors import (
    InvalidMediaType,
    NoResultAvailable,
    SessionError,
    TryOnError,
)
from vogue_tryon.logging_setup import configure_logging
from vogue_tryon.models import SessionSnapshot
from vogue_tryon.pipeline import TryOnSession
from vogue_tryon.services import GeminiImageGenerator, load_image_asset
from vogue_tryon.services.image_intake import build_image_asset
from vogue_tryon.utils.data_uri import decode_data_uri, media_type_of


logger = logging.getLogger(__name__)

app = FastAPI(
    title="Vogue AI Try-On API",
    description="Virtual try-on with Gemini image generation",
    version=__version__,
)

# Enable CORS for the browser front-end
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class GenerateRequest(BaseModel):
    """Request body for session generation."""
    instructions: str | None = None


class TryOnRequest(BaseModel):
    """Request body for stateless try-on generation."""
    person_photo: str  # Base64 data URL
    outfit_photo: str  # Base64 data URL
    instructions: str | None = None


class TryOnResponse(BaseModel):
    """Response with generated image."""
    success: bool
    image: str | None = None  # data:image/png;base64,...
    error: str | None = None


# Initialized on first request
_config: AppConfig | None = None
_generator: GeminiImageGenerator | None = None
_sessions: "OrderedDict[str, TryOnSession]" = OrderedDict()  # least recently used first


def get_config() -> AppConfig:
    global _config
    if _config is None:
        _config = load_config()  # Loads from .env automatically via pydantic-settings
        configure_logging(_config.log_level)
    return _config


def get_generator() -> GeminiImageGenerator:
    """Get or create the shared Gemini generator."""
    global _generator
    if _generator is None:
        config = get_config()
        _generator = GeminiImageGenerator(api_key=config.api_key, config=config.generation)
    return _generator


def create_session() -> TryOnSession:
    config = get_config()
    session = TryOnSession(
        generator=get_generator(),
        composer=TryOnPromptComposer(default_media_type=config.generation.default_media_type),
        download_prefix=config.download_prefix,
    )
    _sessions[session.session_id] = session
    while len(_sessions) > config.max_sessions:
        evicted_id, _ = _sessions.popitem(last=False)
        logger.info("Evicted session %s (limit %d)", evicted_id, config.max_sessions)
    return session


def get_session(session_id: str) -> TryOnSession:
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    _sessions.move_to_end(session_id)
    return session


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "Vogue AI Try-On API", "version": __version__}


@app.get("/health")
async def health():
    """Detailed health check."""
    config = get_config()
    return {
        "status": "ok" if config.has_credential else "degraded",
        "credential": "configured" if config.has_credential else "missing",
        "model": config.generation.model,
    }


@app.post("/api/sessions", response_model=SessionSnapshot)
async def new_session():
    return create_session().snapshot()


@app.get("/api/sessions/{session_id}", response_model=SessionSnapshot)
async def read_session(session_id: str):
    return get_session(session_id).snapshot()


@app.delete("/api/sessions/{session_id}", status_code=204)
async def delete_session(session_id: str):
    """Drop a session and the images it holds."""
    if _sessions.pop(session_id, None) is None:
        raise HTTPException(status_code=404, detail=f"Unknown session {session_id}")
    return Response(status_code=204)


async def _upload(session_id: str, file: UploadFile, slot: str) -> SessionSnapshot:
    session = get_session(session_id)
    try:
        asset = await load_image_asset(file)
    except InvalidMediaType as e:
        raise HTTPException(status_code=415, detail=e.user_message)

    if slot == "subject":
        session.select_subject(asset)
    else:
        session.select_garment(asset)
    return session.snapshot()


@app.put("/api/sessions/{session_id}/subject", response_model=SessionSnapshot)
async def upload_subject(session_id: str, file: UploadFile = File(...)):
    """Upload the person photo."""
    return await _upload(session_id, file, "subject")


@app.put("/api/sessions/{session_id}/garment", response_model=SessionSnapshot)
async def upload_garment(session_id: str, file: UploadFile = File(...)):
    """Upload the outfit photo."""
    return await _upload(session_id, file, "garment")


@app.delete("/api/sessions/{session_id}/subject", response_model=SessionSnapshot)
async def remove_subject(session_id: str):
    session = get_session(session_id)
    session.select_subject(None)
    return session.snapshot()


@app.delete("/api/sessions/{session_id}/garment", response_model=SessionSnapshot)
async def remove_garment(session_id: str):
    session = get_session(session_id)
    session.select_garment(None)
    return session.snapshot()


@app.post("/api/sessions/{session_id}/generate", response_model=SessionSnapshot)
async def generate(session_id: str, request: GenerateRequest | None = None):
    """Generate a try-on image from the held photos.

    Generation failures are reported in the snapshot (status "error"), not as
    HTTP errors.
    """
    session = get_session(session_id)
    instructions = request.instructions if request else None
    try:
        await session.generate(instructions)
    except SessionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session.snapshot()


@app.post("/api/sessions/{session_id}/regenerate", response_model=SessionSnapshot)
async def regenerate(session_id: str):
    session = get_session(session_id)
    try:
        await session.regenerate()
    except SessionError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session.snapshot()


@app.post("/api/sessions/{session_id}/reset", response_model=SessionSnapshot)
async def reset(session_id: str):
    session = get_session(session_id)
    session.reset()
    return session.snapshot()


@app.get("/api/sessions/{session_id}/download")
async def download(session_id: str):
    """Download the generated image as a PNG file."""
    session = get_session(session_id)
    try:
        filename, png_bytes = session.download()
    except NoResultAvailable as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(
        content=png_bytes,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@app.post("/api/tryon", response_model=TryOnResponse)
async def generate_tryon(request: TryOnRequest):
    """Generate a virtual try-on image in one call.

    Args:
        request: Person photo and outfit photo (base64 data URLs) and optional styling text

    Returns:
        PNG data URL of the try-on result, or the error message
    """
    config = get_config()
    default_type = config.generation.default_media_type
    session = TryOnSession(
        generator=get_generator(),
        composer=TryOnPromptComposer(default_media_type=default_type),
        download_prefix=config.download_prefix,
    )

    try:
        session.select_subject(build_image_asset(
            decode_data_uri(request.person_photo),
            media_type_of(request.person_photo, default=default_type),
            "person",
        ))
        session.select_garment(build_image_asset(
            decode_data_uri(request.outfit_photo),
            media_type_of(request.outfit_photo, default=default_type),
            "outfit",
        ))
    except TryOnError as e:
        return TryOnResponse(success=False, error=e.user_message)
    except ValueError as e:
        return TryOnResponse(success=False, error=f"Invalid image data: {e}")

    result = await session.generate(request.instructions)
    if result is None:
        return TryOnResponse(success=False, error=session.error)

    return TryOnResponse(success=True, image=result.image_data_uri)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
