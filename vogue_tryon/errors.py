"""Error taxonomy for the try-on workflow.

``TryOnError`` subclasses are generation failures: they end an attempt and
put the session into the error state with ``user_message`` shown to the user.
``SessionError`` subclasses are precondition violations raised before any
state change happens.
"""


class TryOnError(Exception):
    """Base class for failures surfaced to the user as a single message."""

    default_message = "Something went wrong while generating the look."

    def __init__(self, message: str | None = None):
        self.user_message = message or self.default_message
        super().__init__(self.user_message)


class InvalidMediaType(TryOnError):
    """The selected file is not an image."""

    default_message = "Please upload an image file."

    def __init__(self, content_type: str | None = None, message: str | None = None):
        self.content_type = content_type
        if message is None and content_type:
            message = f"Please upload an image file (got {content_type!r})."
        super().__init__(message)


class MissingCredential(TryOnError):
    default_message = "API Key is missing in environment variables."


class TransportError(TryOnError):
    """Network or service failure while talking to the image model."""

    default_message = "The image generation service could not be reached."


class NoCandidates(TryOnError):
    default_message = "No candidates returned from Gemini."


class ModelRefused(TryOnError):
    """The model answered with text instead of an image."""

    default_message = (
        "The model could not generate the image. It might have violated "
        "safety policies or the prompt was unclear."
    )

    def __init__(self, model_text: str):
        self.model_text = model_text
        super().__init__(f"{self.default_message} Model response: {model_text.strip()}")


class NoImageData(TryOnError):
    default_message = "No image data found in response."


class SessionError(Exception):
    """An operation was invoked in a state that does not allow it."""


class SessionNotReady(SessionError):
    """Generation needs both a person image and an outfit image."""


class GenerationInProgress(SessionError):
    """A generation attempt is already running for this session."""


class NoResultAvailable(SessionError):
    """There is no generated image to download yet."""
