"""
Frame decoding and encoding for Packshot Studio.

Handles the file side of an editing session: turning an uploaded file into
a Frame, encoding frames for the AI collaborator or for download, and
naming downloaded files.

Functions:
    decode_upload: Decode uploaded bytes into a Frame
    decode_ai_result: Decode image bytes returned by the AI collaborator
    encode_frame: Encode a Frame in its own format
    download_filename: Build the Packshot_{w}x{h}_{n}.{ext} name

Classes:
    SaveCounter: Per-session download counter
"""

import io
import logging
from pathlib import Path
from typing import Optional, Union

from PS_Libs.constants import (
    DEFAULT_OUTPUT_FORMAT,
    DOWNLOAD_FILENAME_PATTERN,
    MIME_JPEG,
    MIME_PNG,
)
from PS_Libs.errors import AiProcessingError, UploadError
from PS_Libs.ImageEditingLib.image_models import Frame
from PS_Libs.pillow_compat import Image

logger = logging.getLogger(__name__)


def _open(data: bytes) -> 'Image.Image':
    image = Image.open(io.BytesIO(data))
    image.load()
    return image


def decode_upload(source: Union[bytes, Path], filename: Optional[str] = None) -> Frame:
    """
    Decode an uploaded file into a Frame.

    JPEG uploads keep their encoding (so a download of the untouched
    original is a .jpg); everything else is treated as PNG.

    Args:
        source: Raw file bytes or a path to the file
        filename: Original file name, used only for log messages

    Returns:
        Frame holding the decoded image

    Raises:
        UploadError: If the file cannot be read or is not an image
    """
    try:
        if isinstance(source, Path):
            filename = filename or source.name
            data = source.read_bytes()
        else:
            data = source
        image = _open(data)
    except (OSError, ValueError) as exc:
        raise UploadError(f"Could not decode upload {filename or ''}: {exc}") from exc

    logger.debug(f"Decoded upload {filename or '<bytes>'} ({image.format}, {image.size})")
    if image.format == "JPEG":
        return Frame(image=image.convert("RGB"), mime=MIME_JPEG)
    return Frame(image=image.convert("RGBA"), mime=MIME_PNG)


def decode_ai_result(data: bytes) -> Frame:
    """
    Decode image bytes returned by the AI collaborator.

    Raises:
        AiProcessingError: If the bytes are not a readable image
    """
    try:
        image = _open(data)
    except (OSError, ValueError) as exc:
        raise AiProcessingError(f"AI result is not a readable image: {exc}") from exc
    return Frame(image=image.convert("RGBA"), mime=MIME_PNG)


def encode_frame(frame: Frame) -> bytes:
    """Encode the frame as JPEG when its MIME type says so, PNG otherwise."""
    buffer = io.BytesIO()
    if frame.mime == MIME_JPEG:
        frame.image.convert("RGB").save(buffer, format="JPEG", quality=95)
    else:
        frame.image.save(buffer, format=DEFAULT_OUTPUT_FORMAT)
    return buffer.getvalue()


def download_filename(frame: Frame, counter: int) -> str:
    """Return e.g. ``Packshot_500x500_1.png`` for the given frame."""
    ext = "jpg" if frame.mime == MIME_JPEG else "png"
    return DOWNLOAD_FILENAME_PATTERN.format(
        width=frame.width,
        height=frame.height,
        counter=counter,
        ext=ext,
    )


class SaveCounter:
    """Auto-incrementing download number, starting at 1 per upload."""

    def __init__(self):
        self.value = 1

    def next(self) -> int:
        current = self.value
        self.value += 1
        return current

    def reset(self) -> None:
        self.value = 1
