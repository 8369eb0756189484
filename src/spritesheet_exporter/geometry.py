"""
Geometry types shared by the extractor and the export manager.

Pixel data is always row-major with a fixed number of bytes per pixel (the
"span"). Region coordinates are in atlas pixel space, with the size given as
the region is stored in the atlas, i.e. before any rotation is undone.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import NamedTuple, Optional, Tuple

import numpy as np

from spritesheet_exporter.errors import OutOfBoundsError


class Point(NamedTuple):
    x: int
    y: int


class Size(NamedTuple):
    w: int
    h: int


@dataclass(frozen=True)
class PixelBuffer:
    """
    Immutable row-major pixel data.

    Attributes:
        data: Raw pixel bytes, ``width * height * bytes_per_pixel`` long
        width: Width in pixels
        height: Height in pixels
        bytes_per_pixel: Number of bytes per pixel (4 for BGRA8)
    """

    data: bytes
    width: int
    height: int
    bytes_per_pixel: int = 4

    def __post_init__(self):
        if self.bytes_per_pixel <= 0:
            raise ValueError(
                f"bytes_per_pixel must be positive, got {self.bytes_per_pixel}"
            )
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Invalid buffer size {self.width}x{self.height}")
        # Accept bytearray/memoryview but store an immutable copy.
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        expected = self.width * self.height * self.bytes_per_pixel
        if len(self.data) != expected:
            raise ValueError(
                f"Buffer holds {len(self.data)} bytes, expected {expected} for "
                f"{self.width}x{self.height} at {self.bytes_per_pixel} bytes per pixel"
            )

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def as_array(self) -> np.ndarray:
        """Return a read-only (height, width, bytes_per_pixel) view of the data."""
        array = np.frombuffer(self.data, dtype=np.uint8)
        return array.reshape(self.height, self.width, self.bytes_per_pixel)

    @classmethod
    def from_array(cls, array: np.ndarray) -> "PixelBuffer":
        """Build a buffer from a (height, width, bytes_per_pixel) uint8 array."""
        if array.ndim != 3:
            raise ValueError(f"Expected a 3D pixel array, got shape {array.shape}")
        height, width, span = array.shape
        return cls(
            data=np.ascontiguousarray(array, dtype=np.uint8).tobytes(),
            width=width,
            height=height,
            bytes_per_pixel=span,
        )


@dataclass(frozen=True)
class RegionDescriptor:
    """Where one sprite is packed inside an atlas."""

    name: str
    origin: Point
    size: Size
    rotated: bool = False

    def __post_init__(self):
        object.__setattr__(self, "origin", Point(*self.origin))
        object.__setattr__(self, "size", Size(*self.size))


@dataclass(frozen=True)
class TextureHandle:
    """
    Identifies the texture an atlas is packed into.

    Attributes:
        path: Image file holding the atlas pixels
        texture_name: File name recorded by the sheet, used for the full-atlas output
        identifier: Name of the texture itself, used as the output sub-directory
    """

    path: Path
    texture_name: str
    identifier: str


@dataclass(frozen=True)
class AtlasDescriptor:
    """An atlas texture together with the regions packed into it."""

    name: str
    texture: TextureHandle
    regions: Tuple[RegionDescriptor, ...] = ()
    source_path: Optional[Path] = None

    def __post_init__(self):
        object.__setattr__(self, "regions", tuple(self.regions))


def validate_region(atlas: PixelBuffer, region: RegionDescriptor) -> None:
    """
    Check that a region lies fully inside an atlas buffer.

    Raises:
        OutOfBoundsError: If the region has a negative origin or size, or extends
            past the right or bottom edge of the atlas.
    """
    x, y = region.origin
    w, h = region.size
    if x < 0 or y < 0:
        raise OutOfBoundsError(
            f"Region '{region.name}' has negative origin ({x}, {y})"
        )
    if w < 0 or h < 0:
        raise OutOfBoundsError(f"Region '{region.name}' has negative size {w}x{h}")
    if x + w > atlas.width or y + h > atlas.height:
        raise OutOfBoundsError(
            f"Region '{region.name}' at ({x}, {y}) size {w}x{h} exceeds atlas "
            f"bounds {atlas.width}x{atlas.height}"
        )
