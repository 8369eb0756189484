"""
PNG encoding and writing of raw pixel buffers.

This module is the only place that touches the file system on the output side:
it validates the destination, encodes raw pixels with Pillow and writes the
resulting PNG bytes.
"""

import io
import logging
import os
from pathlib import Path

from PIL import Image

from spritesheet_exporter import config
from spritesheet_exporter.errors import (
    EncodeFailedError,
    InvalidDestinationPathError,
    WriteFailedError,
)

logger = logging.getLogger("spritesheet_exporter.export.png_writer")

INVALID_FILENAME_CHARS = set('<>:"|?*')

RESERVED_FILENAMES = {"CON", "PRN", "AUX", "NUL"}
RESERVED_FILENAMES.update(f"COM{i}" for i in range(1, 10))
RESERVED_FILENAMES.update(f"LPT{i}" for i in range(1, 10))


def _path_problem(output_path):
    """Return a description of what is wrong with a path, or None if it is usable."""
    raw = os.fspath(output_path)
    if not raw:
        return "path is empty"
    if "\0" in raw:
        return "path contains a NUL character"
    if raw.endswith(("/", os.sep)):
        return "path has no file name"

    path = Path(raw)
    components = path.parts[1:] if path.anchor else path.parts
    for component in components:
        bad = sorted(
            {c for c in component if c in INVALID_FILENAME_CHARS or ord(c) < 32}
        )
        if bad:
            shown = "".join(c if ord(c) >= 32 else f"\\x{ord(c):02x}" for c in bad)
            return f"'{component}' contains invalid characters '{shown}'"

    if path.stem.upper() in RESERVED_FILENAMES:
        return f"'{path.name}' is a reserved file name"
    return None


def validate_destination_path(output_path):
    """
    Validate an output file path before anything is encoded.

    Args:
        output_path: Destination file path (str or Path)

    Raises:
        InvalidDestinationPathError: If the path cannot name a file
    """
    problem = _path_problem(output_path)
    if problem:
        logger.warning(f"Invalid file path provided: '{problem}'")
        raise InvalidDestinationPathError(f"{output_path}: {problem}")


class PngWriter:
    """
    Encodes raw pixel buffers as PNG files.
    """

    def __init__(self, compress_level=None):
        """
        Initialize the writer.

        Args:
            compress_level: zlib compression level, defaults to config.PNG_COMPRESS_LEVEL
        """
        if compress_level is None:
            compress_level = config.PNG_COMPRESS_LEVEL
        self.compress_level = compress_level

    def encode(self, data: bytes, width: int, height: int, pixel_format: str) -> bytes:
        """
        Encode raw pixels to PNG bytes.

        Raises:
            EncodeFailedError: If the format is unknown, the byte count does not
                match the dimensions, or Pillow fails to encode
        """
        try:
            raw_mode, image_mode, span = config.PIXEL_FORMATS[pixel_format]
        except KeyError:
            raise EncodeFailedError(f"Unsupported pixel format '{pixel_format}'") from None

        expected = width * height * span
        if len(data) != expected:
            raise EncodeFailedError(
                f"Got {len(data)} bytes for a {width}x{height} {pixel_format} image, "
                f"expected {expected}"
            )
        if width <= 0 or height <= 0:
            raise EncodeFailedError(f"Cannot encode an empty {width}x{height} image")

        try:
            image = Image.frombytes(image_mode, (width, height), data, "raw", raw_mode)
            stream = io.BytesIO()
            image.save(stream, format="PNG", compress_level=self.compress_level)
        except (ValueError, OSError, SystemError) as e:
            raise EncodeFailedError(f"PNG encoding failed: {e}") from e
        return stream.getvalue()

    def encode_and_write(self, pixels, width, height, pixel_format, output_path):
        """
        Validate the destination, encode a pixel buffer and write it as a PNG file.

        Args:
            pixels: PixelBuffer or raw bytes holding the image
            width: Declared width of the image
            height: Declared height of the image
            pixel_format: Key of config.PIXEL_FORMATS describing the byte layout
            output_path: Destination file path

        Returns:
            Path of the written file

        Raises:
            InvalidDestinationPathError: If the destination path is rejected
            EncodeFailedError: If the pixels cannot be encoded
            WriteFailedError: If the file cannot be written
        """
        validate_destination_path(output_path)
        data = getattr(pixels, "data", pixels)
        png_data = self.encode(data, width, height, pixel_format)

        path = Path(output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(png_data)
        except OSError as e:
            raise WriteFailedError(f"Could not write {path}: {e}") from e

        logger.debug(f"Wrote {width}x{height} image to {path} ({len(png_data)} bytes)")
        return path
