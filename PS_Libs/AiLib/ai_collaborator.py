"""
AI collaborator interface.

The editor never talks to a model directly; it awaits an object with these
three coroutines. Implementations raise the ``PS_Libs.errors.AiError``
subclasses on failure.
"""

from typing import Optional, Protocol

from PS_Libs.constants import IMAGE_KIND_LOGO, IMAGE_KIND_PACKSHOT

IMAGE_KINDS = (IMAGE_KIND_LOGO, IMAGE_KIND_PACKSHOT)


class AiCollaborator(Protocol):
    async def classify(self, image: bytes, mime: str) -> str:
        """Return ``"logo"`` or ``"packshot"``."""
        ...

    async def remove_background(
        self,
        image: bytes,
        mime: str,
        instruction: Optional[str] = None,
    ) -> bytes:
        """Return encoded image bytes with the background replaced by white."""
        ...

    async def auto_white_balance(self, image: bytes, mime: str) -> bytes:
        """Return color-corrected image bytes with identical pixel dimensions."""
        ...
