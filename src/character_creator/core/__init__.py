"""Core functionality for portrait transformation.

- **CreatorConfig / config**: Configuration management using Pydantic Settings
- **image_source**: Reading uploads into data URLs and exporting renders
- **TransformationServiceClient**: Gemini request/response wrapper
- **prompts**: The fixed GTA style direction
"""

from .config import CreatorConfig, config
from .image_source import (
    ImageSourceError,
    decode_data_url,
    data_url_to_image,
    encode_data_url,
    export_image,
    read_image_as_data_url,
)
from .prompts import build_transformation_prompt
from .transform_client import TransformationError, TransformationServiceClient

__all__ = [
    "CreatorConfig",
    "config",
    "ImageSourceError",
    "decode_data_url",
    "data_url_to_image",
    "encode_data_url",
    "export_image",
    "read_image_as_data_url",
    "build_transformation_prompt",
    "TransformationError",
    "TransformationServiceClient",
]
