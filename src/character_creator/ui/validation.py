"""Validation utilities for Character Creator UI inputs."""

import logging

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_instruction(instruction: str | None, max_length: int) -> str:
    """Validate the optional instruction text.

    Note:
        A blank instruction is valid; the default styling applies.

    Args:
        instruction: Instruction text from the UI (may be None)
        max_length: Maximum allowed number of characters

    Returns:
        The instruction with surrounding whitespace removed

    Raises:
        ValidationError: If the instruction is too long
    """
    text = (instruction or "").strip()

    if len(text) > max_length:
        raise ValidationError(
            f"Instruction is too long ({len(text)} characters). "
            f"Maximum is {max_length} characters."
        )

    return text


def validate_upload_path(path: str | None) -> str:
    """Check that the upload control produced a file path.

    Raises:
        ValidationError: If no file was provided
    """
    if not path:
        raise ValidationError("No image file selected")
    return path
