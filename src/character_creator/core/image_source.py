"""Read locally selected images into self-contained data URLs.

The data URL form (``data:image/png;base64,...``) is used everywhere an image
travels through the application: as the preview source, as the payload sent
to the transformation service, and as the stored history entry.
"""

import asyncio
import base64
import binascii
import logging
import re
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# Pillow format name -> MIME type for the formats the upload control accepts
SUPPORTED_FORMATS = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
    "BMP": "image/bmp",
}

_DATA_URL_PATTERN = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.+)$", re.S)


class ImageSourceError(Exception):
    """Raised when a selected file cannot be read as an image.

    The message is intended to be displayed directly to the user.
    """

    pass


def encode_data_url(data: bytes, mime_type: str) -> str:
    """Encode raw image bytes as a base64 data URL.

    Args:
        data: Raw image bytes
        mime_type: MIME type of the bytes (e.g. ``image/png``)

    Returns:
        Data URL string
    """
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{payload}"


def decode_data_url(data_url: str) -> tuple[bytes, str]:
    """Split a base64 data URL back into raw bytes and MIME type.

    Args:
        data_url: Data URL produced by :func:`encode_data_url`

    Returns:
        Tuple of (image_bytes, mime_type)

    Raises:
        ImageSourceError: If the string is not a base64 data URL
    """
    match = _DATA_URL_PATTERN.match(data_url or "")
    if match is None:
        raise ImageSourceError("Image data is not a valid base64 data URL")

    try:
        data = base64.b64decode(match.group("payload"), validate=True)
    except (binascii.Error, ValueError) as e:
        raise ImageSourceError(f"Image data could not be decoded: {e}") from e

    if not data:
        raise ImageSourceError("Image data is empty")

    return data, match.group("mime")


def data_url_to_image(data_url: str) -> Image.Image:
    """Decode a data URL into a loaded PIL image for display.

    Raises:
        ImageSourceError: If the data URL does not hold a readable image
    """
    data, _ = decode_data_url(data_url)
    try:
        img = Image.open(BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageSourceError("Image data is not a readable image") from e
    return img


def _read_image_file(path: Path) -> str:
    """Blocking part of :func:`read_image_as_data_url`."""
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ImageSourceError(f"Could not read {path.name}: {e.strerror or e}") from e

    if not data:
        raise ImageSourceError(f"{path.name} is empty")

    try:
        with Image.open(BytesIO(data)) as img:
            image_format = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ImageSourceError(f"{path.name} is not a readable image") from e

    mime_type = SUPPORTED_FORMATS.get(image_format or "")
    if mime_type is None:
        raise ImageSourceError(
            f"Unsupported image format: {image_format}. Use PNG, JPG or WEBP."
        )

    logger.debug(f"Read {path.name}: {image_format}, {len(data)} bytes")
    return encode_data_url(data, mime_type)


async def read_image_as_data_url(path: str | Path) -> str:
    """Read an image file and return it as a data URL.

    The read runs in a worker thread so the event loop stays responsive while
    large files load. The original bytes are preserved; Pillow is only used to
    confirm the file is an image and to identify its format.

    Args:
        path: Path to the selected image file

    Returns:
        Data URL embedding the image bytes

    Raises:
        ImageSourceError: If the file is missing, unreadable or not an image
    """
    if not path:
        raise ImageSourceError("No image file selected")

    return await asyncio.to_thread(_read_image_file, Path(path))


def export_image(data_url: str, export_dir: Path, filename: str) -> Path:
    """Write a data URL image to ``export_dir / filename``.

    Non-PNG payloads are converted so the file contents match the fixed
    ``.png`` download name.

    Args:
        data_url: Image to export
        export_dir: Target directory (created if missing)
        filename: Fixed download filename

    Returns:
        Path of the written file

    Raises:
        ImageSourceError: If the data URL cannot be decoded
    """
    data, mime_type = decode_data_url(data_url)
    export_dir.mkdir(parents=True, exist_ok=True)
    target = export_dir / filename

    if mime_type == "image/png" or not filename.lower().endswith(".png"):
        target.write_bytes(data)
    else:
        try:
            with Image.open(BytesIO(data)) as img:
                img.save(target, format="PNG")
        except (UnidentifiedImageError, OSError) as e:
            raise ImageSourceError(f"Could not export image: {e}") from e

    logger.info(f"Exported render to {target}")
    return target
