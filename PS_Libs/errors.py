"""
Error types raised by the Packshot Studio editing engine.

Every error carries an ``error_key`` that selects the user-facing status
text (see ``PS_Libs.constants.STATUS_MESSAGES`` / ``ERROR_MESSAGES``).
"""


class PackshotError(Exception):
    """Base class for all editor failures that abort a single command."""

    error_key = "default"


class UploadError(PackshotError):
    """The uploaded file could not be decoded into a frame."""

    error_key = "uploadError"


class ContextUnavailableError(PackshotError):
    """A pixel buffer could not be acquired for the frame."""


class TransformError(PackshotError):
    """Generic geometry failure."""


class AiError(PackshotError):
    """Failure reported by (or on behalf of) the AI collaborator."""

    error_key = "aiProcessingError"


class QuotaExceededError(AiError):
    """Daily or per-minute AI budget exhausted, locally or at the provider."""

    error_key = "quotaExceeded"


class AiProcessingError(AiError):
    error_key = "aiProcessingError"


class NoImageDataError(AiError):
    """Background removal response carried no image."""

    error_key = "noImageData"


class NoImageDataBalanceError(AiError):
    """White balance response carried no image."""

    error_key = "noImageDataBalance"


class ObjectNotFoundError(TransformError):
    """The frame contains no foreground pixels to work with."""

    error_key = "objectNotFound"


class EditorBusyError(RuntimeError):
    """A mutating command was issued while another one is still pending."""
