"""Unit tests for reading, encoding and exporting images."""

import asyncio
import base64
from io import BytesIO

import pytest
from PIL import Image

from character_creator.core.image_source import (
    ImageSourceError,
    data_url_to_image,
    decode_data_url,
    encode_data_url,
    export_image,
    read_image_as_data_url,
)


class TestDataUrls:
    """Tests for data URL encoding and decoding."""

    def test_encode_format(self, png_bytes):
        """Test that encoding yields a base64 data URL with the MIME type."""
        data_url = encode_data_url(png_bytes, "image/png")

        assert data_url.startswith("data:image/png;base64,")
        assert base64.b64decode(data_url.split(",", 1)[1]) == png_bytes

    def test_decode_returns_bytes_and_mime(self, png_bytes):
        """Test that decoding recovers bytes and MIME type."""
        data, mime = decode_data_url(encode_data_url(png_bytes, "image/webp"))

        assert data == png_bytes
        assert mime == "image/webp"

    @pytest.mark.parametrize(
        "value",
        [
            "",
            "not a data url",
            "data:image/png,rawdata",
            "data:image/png;base64,@@@not-base64@@@",
            "https://example.com/image.png",
        ],
    )
    def test_decode_rejects_malformed(self, value):
        """Test that malformed data URLs raise ImageSourceError."""
        with pytest.raises(ImageSourceError):
            decode_data_url(value)

    def test_data_url_to_image(self, source_data_url):
        """Test that a data URL decodes into a loaded PIL image."""
        img = data_url_to_image(source_data_url)

        assert img.size == (8, 8)

    def test_data_url_to_image_rejects_non_image(self):
        """Test that non-image payloads raise ImageSourceError."""
        with pytest.raises(ImageSourceError):
            data_url_to_image(encode_data_url(b"hello", "image/png"))


class TestReadImageAsDataUrl:
    """Tests for the asynchronous file reader."""

    def test_reads_png(self, png_path, png_bytes):
        """Test that a PNG is returned as a data URL of the original bytes."""
        data_url = asyncio.run(read_image_as_data_url(png_path))

        assert data_url == encode_data_url(png_bytes, "image/png")

    def test_reads_jpeg_with_jpeg_mime(self, temp_dir):
        """Test that the MIME type follows the real image format."""
        path = temp_dir / "photo.jpg"
        Image.new("RGB", (4, 4), "green").save(path, format="JPEG")

        data_url = asyncio.run(read_image_as_data_url(str(path)))

        assert data_url.startswith("data:image/jpeg;base64,")

    def test_format_detected_from_content_not_extension(self, temp_dir, png_bytes):
        """Test that a PNG saved with a .jpg name is still reported as PNG."""
        path = temp_dir / "mislabelled.jpg"
        path.write_bytes(png_bytes)

        data_url = asyncio.run(read_image_as_data_url(path))

        assert data_url.startswith("data:image/png;base64,")

    def test_missing_file(self, temp_dir):
        """Test that a missing file raises ImageSourceError."""
        with pytest.raises(ImageSourceError, match="Could not read"):
            asyncio.run(read_image_as_data_url(temp_dir / "missing.png"))

    def test_empty_file(self, temp_dir):
        """Test that an empty file raises ImageSourceError."""
        path = temp_dir / "empty.png"
        path.write_bytes(b"")

        with pytest.raises(ImageSourceError, match="empty"):
            asyncio.run(read_image_as_data_url(path))

    def test_not_an_image(self, temp_dir):
        """Test that a text file raises ImageSourceError."""
        path = temp_dir / "notes.png"
        path.write_text("definitely not pixels")

        with pytest.raises(ImageSourceError, match="not a readable image"):
            asyncio.run(read_image_as_data_url(path))

    def test_unsupported_format(self, temp_dir):
        """Test that image formats outside the accepted set are rejected."""
        path = temp_dir / "image.tiff"
        Image.new("RGB", (4, 4), "white").save(path, format="TIFF")

        with pytest.raises(ImageSourceError, match="Unsupported image format"):
            asyncio.run(read_image_as_data_url(path))

    def test_no_path(self):
        """Test that an empty path raises ImageSourceError."""
        with pytest.raises(ImageSourceError, match="No image file selected"):
            asyncio.run(read_image_as_data_url(""))


class TestExportImage:
    """Tests for writing the current render to disk."""

    def test_writes_png_bytes_unchanged(self, temp_dir, png_bytes):
        """Test that PNG payloads are written as-is under the fixed name."""
        target = export_image(
            encode_data_url(png_bytes, "image/png"), temp_dir / "out", "gta-character.png"
        )

        assert target == temp_dir / "out" / "gta-character.png"
        assert target.read_bytes() == png_bytes

    def test_converts_jpeg_to_png(self, temp_dir):
        """Test that non-PNG payloads are converted to match the .png name."""
        buffer = BytesIO()
        Image.new("RGB", (4, 4), "yellow").save(buffer, format="JPEG")

        target = export_image(
            encode_data_url(buffer.getvalue(), "image/jpeg"), temp_dir, "gta-character.png"
        )

        with Image.open(target) as img:
            assert img.format == "PNG"

    def test_rejects_malformed_data_url(self, temp_dir):
        """Test that an undecodable image raises ImageSourceError."""
        with pytest.raises(ImageSourceError):
            export_image("garbage", temp_dir, "gta-character.png")
