"""Client for the remote generative-image transformation service.

Wraps a single Gemini ``generate_content`` call: the source portrait and the
composed prompt go out, the first inline image of the reply comes back as a
data URL. Every failure is reported as a :class:`TransformationError` whose
message can be shown to the user as-is. There is no retry and no caching.
"""

import logging
from typing import Any

from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from .config import CreatorConfig
from .image_source import ImageSourceError, decode_data_url, encode_data_url
from .prompts import build_transformation_prompt

logger = logging.getLogger(__name__)


class TransformationError(Exception):
    """Raised when the remote service does not produce a transformed image.

    The message is intended to be displayed directly to the user.
    """

    pass


def _failure_reason(response: Any) -> str:
    """Explain why a response carried no image."""
    feedback = getattr(response, "prompt_feedback", None)
    block_reason = getattr(feedback, "block_reason", None)
    if block_reason:
        return f"Request was blocked ({getattr(block_reason, 'name', block_reason)})."

    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return "The model returned no candidates."

    candidate = candidates[0]
    texts = [
        part.text
        for part in (getattr(getattr(candidate, "content", None), "parts", None) or [])
        if getattr(part, "text", None)
    ]
    if texts:
        return " ".join(text.strip() for text in texts)

    finish_reason = getattr(candidate, "finish_reason", None)
    if finish_reason:
        return f"Generation stopped ({getattr(finish_reason, 'name', finish_reason)})."
    return "The model did not return an image."


def extract_image(response: Any) -> tuple[bytes, str]:
    """Return the first inline image of a ``generate_content`` response.

    Args:
        response: ``GenerateContentResponse`` from the Gemini SDK

    Returns:
        Tuple of (image_bytes, mime_type)

    Raises:
        TransformationError: If the response holds no image
    """
    for candidate in getattr(response, "candidates", None) or []:
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or []:
            blob = getattr(part, "inline_data", None)
            if blob is not None and getattr(blob, "data", None):
                return blob.data, blob.mime_type or "image/png"

    reason = _failure_reason(response)
    logger.warning(f"Transformation response contained no image: {reason}")
    raise TransformationError(f"No image was generated. {reason}")


class TransformationServiceClient:
    """Sends portraits to Gemini and returns the stylized result.

    Args:
        settings: Configuration providing the API key and model id
        client: Pre-built ``genai.Client`` (created lazily from settings if omitted)
    """

    def __init__(self, settings: CreatorConfig, client: genai.Client | None = None):
        self.settings = settings
        self._client = client

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.settings.gemini_api_key:
                raise TransformationError(
                    "Gemini API key is not configured. "
                    "Set GEMINI_API_KEY in the environment or .env file."
                )
            self._client = genai.Client(api_key=self.settings.gemini_api_key)
        return self._client

    def build_request(
        self, source_image: str, instruction: str | None = None
    ) -> tuple[list[types.Part], types.GenerateContentConfig]:
        """Build the request contents and config for one transformation.

        Args:
            source_image: Data URL of the portrait
            instruction: Optional user instruction

        Returns:
            Tuple of (contents, config)

        Raises:
            TransformationError: If the source image is missing or malformed
        """
        if not source_image:
            raise TransformationError("No source image to transform")

        try:
            data, mime_type = decode_data_url(source_image)
        except ImageSourceError as e:
            raise TransformationError(str(e)) from e

        contents = [
            types.Part.from_bytes(data=data, mime_type=mime_type),
            types.Part.from_text(text=build_transformation_prompt(instruction)),
        ]
        config = types.GenerateContentConfig(response_modalities=["IMAGE", "TEXT"])
        return contents, config

    async def transform(self, source_image: str, instruction: str | None = None) -> str:
        """Transform a portrait into the GTA style.

        Issues exactly one request to the remote model.

        Args:
            source_image: Data URL of the portrait
            instruction: Optional user instruction; blank means default styling

        Returns:
            Data URL of the transformed image

        Raises:
            TransformationError: On any failure, with a human-readable message
        """
        contents, config = self.build_request(source_image, instruction)
        client = self._get_client()

        logger.info(
            f"Requesting transformation from {self.settings.model_id} "
            f"(instruction: {'yes' if instruction and instruction.strip() else 'no'})"
        )

        try:
            response = await client.aio.models.generate_content(
                model=self.settings.model_id,
                contents=contents,
                config=config,
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error {e.code}: {e.message}")
            raise TransformationError(e.message or f"Gemini API error ({e.code})") from e
        except Exception as e:
            logger.error(f"Transformation request failed: {e}", exc_info=True)
            raise TransformationError(str(e) or e.__class__.__name__) from e

        data, mime_type = extract_image(response)
        logger.info(f"Transformation complete: {mime_type}, {len(data)} bytes")
        return encode_data_url(data, mime_type)
