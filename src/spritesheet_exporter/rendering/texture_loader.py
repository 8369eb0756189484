"""
Atlas texture loading.

This module loads atlas textures from disk and converts them into raw pixel
buffers in the channel layout the rest of the pipeline works with.
"""

import logging

from PIL import Image, UnidentifiedImageError

from spritesheet_exporter import config
from spritesheet_exporter.geometry import PixelBuffer

# Set up logging
logger = logging.getLogger("spritesheet_exporter.rendering.texture_loader")


def pixel_buffer_from_image(image, pixel_format=None):
    """
    Convert a PIL Image into a PixelBuffer.

    Args:
        image: PIL Image in any mode
        pixel_format: Key of config.PIXEL_FORMATS, defaults to config.PIXEL_FORMAT

    Returns:
        PixelBuffer holding the image pixels in the requested layout
    """
    pixel_format = pixel_format or config.PIXEL_FORMAT
    raw_mode, image_mode, span = config.PIXEL_FORMATS[pixel_format]

    if image.mode != image_mode:
        image = image.convert(image_mode)
    width, height = image.size
    data = image.tobytes("raw", raw_mode)
    return PixelBuffer(data=data, width=width, height=height, bytes_per_pixel=span)


class TextureLoader:
    """
    Provides base-level pixel data for atlas textures.
    """

    def __init__(self, pixel_format=None):
        """
        Initialize the texture loader.

        Args:
            pixel_format: Key of config.PIXEL_FORMATS, defaults to config.PIXEL_FORMAT
        """
        self.pixel_format = pixel_format or config.PIXEL_FORMAT
        if self.pixel_format not in config.PIXEL_FORMATS:
            raise ValueError(f"Unsupported pixel format '{self.pixel_format}'")

    def get_base_level_pixels(self, handle):
        """
        Load the pixels of an atlas texture.

        Only the base level is read; PNG-family images carry no other levels.

        Args:
            handle: TextureHandle of the atlas

        Returns:
            PixelBuffer of the texture, or None if it could not be loaded
        """
        try:
            with Image.open(handle.path) as image:
                image.load()
                buffer = pixel_buffer_from_image(image, self.pixel_format)
        except FileNotFoundError:
            logger.error(f"Texture not found: {handle.path}")
            return None
        except Image.DecompressionBombError as e:
            logger.error(f"Texture {handle.path} is too large to load: {e}")
            return None
        except (UnidentifiedImageError, OSError, ValueError) as e:
            logger.error(f"Error loading texture {handle.path}: {e}")
            return None

        logger.info(
            f"Loaded texture '{handle.identifier}' ({buffer.width}x{buffer.height}) "
            f"from {handle.path}"
        )
        return buffer
