"""
Region extraction from packed atlas textures.

This module cuts a single sprite out of an atlas pixel buffer:
1. Unrotated regions are copied row by row, unchanged.
2. Rotated regions were turned 90 degrees clockwise when packed, so they are
   turned back counter-clockwise and the output width and height are swapped.
"""

import logging
from typing import Tuple

import numpy as np

from spritesheet_exporter.geometry import PixelBuffer, RegionDescriptor, validate_region

logger = logging.getLogger("spritesheet_exporter.processing.region_extractor")


def declared_size(region: RegionDescriptor) -> Tuple[int, int]:
    """
    Return the (width, height) of the image a region extracts to.

    The region size describes the packed rectangle, so rotated regions come out
    with their axes swapped.
    """
    w, h = region.size
    if region.rotated:
        return h, w
    return w, h


def extract(atlas: PixelBuffer, region: RegionDescriptor) -> PixelBuffer:
    """
    Extract one region from an atlas into its own pixel buffer.

    For a rotated region the output pixel at (row i, column j) is read from atlas
    row ``origin.y + j``, column ``origin.x + w - i - 1``: packed columns are read
    right to left and each one becomes an output row.

    Args:
        atlas: Pixel buffer of the whole atlas
        region: Region to extract, with its size given as packed in the atlas

    Returns:
        A new PixelBuffer with the same bytes per pixel as the atlas, sized
        according to declared_size(region)

    Raises:
        OutOfBoundsError: If the region does not lie inside the atlas
    """
    validate_region(atlas, region)

    x, y = region.origin
    w, h = region.size
    packed = atlas.as_array()[y : y + h, x : x + w]

    if region.rotated:
        pixels = np.rot90(packed)
    else:
        pixels = packed

    result = PixelBuffer.from_array(pixels)
    logger.debug(
        f"Extracted '{region.name}' from ({x}, {y}) size {w}x{h} "
        f"rotated={region.rotated} -> {result.width}x{result.height}"
    )
    return result
