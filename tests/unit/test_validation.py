"""Unit tests for validation utilities."""

import pytest

from character_creator.ui.validation import (
    ValidationError,
    validate_instruction,
    validate_upload_path,
)


class TestValidationError:
    """Tests for ValidationError exception."""

    def test_validation_error_is_exception(self):
        """Test that ValidationError is an Exception."""
        assert issubclass(ValidationError, Exception)

    def test_validation_error_message(self):
        """Test that ValidationError preserves error message."""
        msg = "Custom validation error"
        with pytest.raises(ValidationError, match=msg):
            raise ValidationError(msg)


class TestValidateInstruction:
    """Tests for validate_instruction function."""

    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t"])
    def test_blank_is_valid(self, value):
        """Test that blank instructions are accepted as empty."""
        assert validate_instruction(value, max_length=10) == ""

    def test_strips_whitespace(self):
        """Test that surrounding whitespace is removed."""
        assert validate_instruction("  add sunglasses \n", max_length=100) == "add sunglasses"

    def test_at_limit_passes(self):
        """Test that an instruction of exactly max_length is accepted."""
        assert validate_instruction("x" * 20, max_length=20) == "x" * 20

    def test_too_long_raises(self):
        """Test that over-long instructions raise ValidationError."""
        with pytest.raises(ValidationError, match="too long \\(21 characters\\)"):
            validate_instruction("x" * 21, max_length=20)

    def test_length_measured_after_stripping(self):
        """Test that surrounding whitespace does not count toward the limit."""
        assert validate_instruction("   " + "x" * 5 + "   ", max_length=5) == "xxxxx"


class TestValidateUploadPath:
    """Tests for validate_upload_path function."""

    def test_path_returned(self):
        """Test that a provided path passes through."""
        assert validate_upload_path("/tmp/portrait.png") == "/tmp/portrait.png"

    @pytest.mark.parametrize("value", [None, ""])
    def test_missing_path_raises(self, value):
        """Test that a cleared upload raises ValidationError."""
        with pytest.raises(ValidationError, match="No image file selected"):
            validate_upload_path(value)
