"""
Gemini-backed AI collaborator.
Uses the Google AI Studio API for classification, background removal and
white balance.
"""

import asyncio
import base64
import json
import logging
import os
from typing import Any, Optional

import google.generativeai as genai

from PS_Libs.constants import IMAGE_KIND_PACKSHOT
from PS_Libs.AiLib.ai_collaborator import IMAGE_KINDS
from PS_Libs.errors import (
    AiProcessingError,
    NoImageDataBalanceError,
    NoImageDataError,
    QuotaExceededError,
)

logger = logging.getLogger(__name__)

CLASSIFY_MODEL = "gemini-2.5-flash"
IMAGE_MODEL = "gemini-2.5-flash-image"

QUOTA_MARKERS = ("429", "RESOURCE_EXHAUSTED", "exceeded your current quota")

CLASSIFY_PROMPT = """Analyze this image. Is it a 'logo' or a 'packshot'?
- A 'logo' is a simple graphic symbol, icon, or stylized text, often on a plain or transparent background.
- A 'packshot' is a photograph of a physical product, such as a bottle, can, box, or other item.
Respond in JSON format as {"image_type": "logo"} or {"image_type": "packshot"}."""

REMOVE_BACKGROUND_PROMPT = """Remove the background completely, making it white.

CRITICAL INSTRUCTIONS:
1. WATERMARKS: Aggressively detect and remove any watermarks, text overlays, or logos that are not part of the physical product itself. Reconstruct the underlying surface naturally.
2. QUALITY PRESERVATION: The product image MUST NOT lose quality. Preserve all original details, textures, and sharpness. Do not blur or oversmooth the product.
3. LIGHT UPSCALE: Perform a light upscale (enhance resolution and clarity) on the subject to ensure it looks high-definition and crisp.
4. EDGES: Ensure the edges of the product are clean, sharp, and natural-looking against the white background."""

CUSTOM_INSTRUCTION_TEMPLATE = """

5. CUSTOM USER INSTRUCTION: {instruction}
If this instruction conflicts with "making it white", prioritize the user instruction for the background appearance, but keep watermark removal and quality preservation enabled."""

WHITE_BALANCE_PROMPT = (
    "Perform an automatic white balance correction on this image. Adjust the colors "
    "to make the whites appear pure white and remove any color cast. The output must "
    "be the color-corrected image. Crucially, do not crop, resize, rotate, or alter "
    "the composition in any way. Maintain the high resolution and quality of the input "
    "image. The output image must have the exact same dimensions as the input image."
)


def build_remove_background_prompt(instruction: Optional[str] = None) -> str:
    """Append the user's instruction, if any, to the background removal prompt."""
    prompt = REMOVE_BACKGROUND_PROMPT
    if instruction and instruction.strip():
        prompt += CUSTOM_INSTRUCTION_TEMPLATE.format(instruction=instruction.strip())
    return prompt


def map_provider_error(error: Exception) -> Exception:
    """Translate a provider exception into a QuotaExceeded / AiProcessing error."""
    message = str(error)
    if any(marker in message for marker in QUOTA_MARKERS):
        return QuotaExceededError(message)
    return AiProcessingError(message)


def extract_image_data(response: Any) -> Optional[bytes]:
    """Return the first inline image payload in a response, or None."""
    candidates = getattr(response, "candidates", None) or []
    for candidate in candidates:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            inline = getattr(part, "inline_data", None)
            if inline is not None and inline.data:
                data = inline.data
                if isinstance(data, str):
                    data = base64.b64decode(data)
                return data
    return None


def parse_image_kind(text: str) -> str:
    """Read ``image_type`` from a JSON reply; anything unexpected is a packshot."""
    try:
        kind = json.loads(text.strip()).get("image_type")
    except (json.JSONDecodeError, AttributeError):
        kind = None

    if kind in IMAGE_KINDS:
        return kind
    logger.warning(f"Unexpected image_type from Gemini: {kind!r}. Defaulting to 'packshot'.")
    return IMAGE_KIND_PACKSHOT


class GeminiCollaborator:
    """
    AI collaborator backed by Google Gemini.

    Handles:
    - API initialization and authentication
    - Image in / image out prompts for background removal and white balance
    - Mapping provider failures onto editor error types
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        classify_model: str = CLASSIFY_MODEL,
        image_model: str = IMAGE_MODEL,
    ):
        """
        Initialize the Gemini client.

        Args:
            api_key: Google AI Studio API key (or set GEMINI_API_KEY env var)
            classify_model: Text model used for logo/packshot classification
            image_model: Image model used for background removal and white balance
        """
        self.api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not self.api_key:
            raise ValueError("GEMINI_API_KEY environment variable not set")

        genai.configure(api_key=self.api_key)
        self.classify_model = genai.GenerativeModel(classify_model)
        self.image_model = genai.GenerativeModel(image_model)

    async def _generate(self, model: Any, image: bytes, mime: str, prompt: str, **kwargs: Any) -> Any:
        try:
            return await asyncio.to_thread(
                model.generate_content,
                [{"mime_type": mime, "data": image}, prompt],
                **kwargs,
            )
        except Exception as exc:
            logger.error(f"Error calling Gemini API: {exc}")
            raise map_provider_error(exc) from exc

    async def classify(self, image: bytes, mime: str) -> str:
        response = await self._generate(
            self.classify_model,
            image,
            mime,
            CLASSIFY_PROMPT,
            generation_config=genai.types.GenerationConfig(
                response_mime_type="application/json",
            ),
        )
        return parse_image_kind(response.text)

    async def remove_background(
        self,
        image: bytes,
        mime: str,
        instruction: Optional[str] = None,
    ) -> bytes:
        response = await self._generate(
            self.image_model,
            image,
            mime,
            build_remove_background_prompt(instruction),
        )
        data = extract_image_data(response)
        if data is None:
            raise NoImageDataError("Background removal returned no image")
        return data

    async def auto_white_balance(self, image: bytes, mime: str) -> bytes:
        response = await self._generate(self.image_model, image, mime, WHITE_BALANCE_PROMPT)
        data = extract_image_data(response)
        if data is None:
            raise NoImageDataBalanceError("White balance returned no image")
        return data
