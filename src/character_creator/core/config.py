"""Configuration management for Character Creator.

This module provides centralized configuration management using Pydantic Settings.
All configuration is loaded from environment variables with the CHARACTER_CREATOR_
prefix, allowing easy customization without code changes.

Environment Variable Loading
-----------------------------
Configuration values are loaded in the following priority order:
1. Environment variables (CHARACTER_CREATOR_* prefix)
2. .env file in the project root
3. Default values defined in CreatorConfig

The Gemini API key is the one exception to the prefix rule: it is also picked
up from the conventional ``GEMINI_API_KEY`` and ``GOOGLE_API_KEY`` variables so
an existing Google AI Studio setup works unchanged.

Example .env file:
    GEMINI_API_KEY=your-key-here
    CHARACTER_CREATOR_MODEL_ID=gemini-2.5-flash-image
    CHARACTER_CREATOR_SERVER_PORT=7860

Global Configuration Instance
------------------------------
A global `config` instance is created automatically at module import time.

Usage Example
-------------
    from character_creator.core.config import config

    print(config.model_id)
    print(config.exports_dir)
"""

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .prompts import DEFAULT_PROMPT_LABEL


class CreatorConfig(BaseSettings):
    """Main configuration for Character Creator.

    Attributes
    ----------
    Remote Model Settings:
        gemini_api_key : str | None
            API key for the Gemini image model
        model_id : str
            Gemini model used for the transformation

    Transformation Settings:
        default_prompt_label : str
            Label recorded in history when no instruction was given
        max_instruction_length : int
            Longest instruction accepted from the UI

    Export:
        exports_dir : Path
            Directory the download button writes into
        download_filename : str
            Fixed filename of the exported image

    UI Settings:
        server_name : str
            Server bind address (0.0.0.0 for local network)
        server_port : int
            Server port (1024-65535)
        share : bool
            Create public gradio.live link (keep False for local-only)
        log_level : Literal["DEBUG", "INFO", "WARNING", "ERROR"]
            Root log level for the application

    Notes
    -----
    - The exports directory is created automatically if it doesn't exist
    - To modify config, set environment variables and restart the application

    Examples
    --------
        >>> custom_config = CreatorConfig(model_id="gemini-2.5-flash-image", share=True)
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CHARACTER_CREATOR_",
        case_sensitive=False,
        extra="ignore",
    )

    # Remote model settings
    gemini_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "CHARACTER_CREATOR_GEMINI_API_KEY",
            "GEMINI_API_KEY",
            "GOOGLE_API_KEY",
            "gemini_api_key",
        ),
        description="API key for Google Gemini",
    )
    model_id: str = Field(
        default="gemini-2.5-flash-image",
        description="Gemini image model used for transformations",
    )

    # Transformation settings
    default_prompt_label: str = Field(
        default=DEFAULT_PROMPT_LABEL,
        description="History label used when the instruction is blank",
    )
    max_instruction_length: int = Field(
        default=2000,
        description="Maximum number of characters accepted for an instruction",
        ge=1,
    )

    # Export
    exports_dir: Path = Field(
        default=Path("exports"),
        description="Directory for downloadable renders",
    )
    download_filename: str = Field(
        default="gta-character.png",
        description="Filename used when exporting the current render",
    )

    # UI settings
    server_name: str = Field(
        default="0.0.0.0",
        description="Server bind address (0.0.0.0 for local network)",
    )
    server_port: int = Field(
        default=7860,
        description="Server port",
        ge=1024,
        le=65535,
    )
    share: bool = Field(
        default=False,
        description="Create public gradio.live link (keep False for local-only)",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Root log level",
    )

    def __init__(self, **kwargs):
        """Initialize configuration and create the exports directory.

        Args:
            **kwargs: Configuration overrides (typically from environment variables)
        """
        super().__init__(**kwargs)

        self.exports_dir.mkdir(parents=True, exist_ok=True)


# Global configuration instance
# Loads values from environment variables (CHARACTER_CREATOR_* prefix) and .env file.
config = CreatorConfig()
