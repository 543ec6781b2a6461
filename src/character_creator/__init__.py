"""Character Creator - Turn character portraits into GTA-style renders."""

__version__ = "0.1.0"

from character_creator.core.config import CreatorConfig, config
from character_creator.core.transform_client import (
    TransformationError,
    TransformationServiceClient,
)

__all__ = [
    "CreatorConfig",
    "config",
    "TransformationError",
    "TransformationServiceClient",
]
