"""
Configuration settings.

Defaults can be overridden through environment variables; command-line flags
override both.
"""

import os

# Directory scanned for sprite sheet descriptors
CONTENT_ROOT = os.environ.get("SPRITESHEET_CONTENT_ROOT", "./Content")

# Root directory that receives one sub-directory per atlas
EXPORT_DIR = os.environ.get("SPRITESHEET_EXPORT_DIR", "./Saved/Atlases")

# Channel layout of loaded atlas pixels and of the buffers handed to the encoder
PIXEL_FORMAT = os.environ.get("SPRITESHEET_PIXEL_FORMAT", "BGRA8")

# zlib compression level used for PNG output (0-9)
PNG_COMPRESS_LEVEL = int(os.environ.get("SPRITESHEET_PNG_COMPRESS_LEVEL", "6"))

# Pixel format name -> (Pillow raw mode, Pillow image mode, bytes per pixel)
PIXEL_FORMATS = {
    "BGRA8": ("BGRA", "RGBA", 4),
    "RGBA8": ("RGBA", "RGBA", 4),
    "G8": ("L", "L", 1),
}
