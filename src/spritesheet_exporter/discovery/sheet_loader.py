"""
Sprite sheet descriptor loading.

Sprite sheets are described by TexturePacker-style JSON files that sit next to
their atlas texture. Both layouts of the ``frames`` section are understood:

- hash:  ``{"frames": {"hero.png": {"frame": {...}, "rotated": false}}}``
- array: ``{"frames": [{"filename": "hero.png", "frame": {...}}]}``

Rotated frames record their unrotated width and height, so the packed size
stored in the RegionDescriptor has those two values swapped.
"""

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from spritesheet_exporter.errors import SheetFormatError
from spritesheet_exporter.geometry import (
    AtlasDescriptor,
    Point,
    RegionDescriptor,
    Size,
    TextureHandle,
)

logger = logging.getLogger("spritesheet_exporter.discovery.sheet_loader")


class FrameRect(BaseModel):
    x: int
    y: int
    w: int = Field(..., ge=0)
    h: int = Field(..., ge=0)


class SheetFrame(BaseModel):
    filename: Optional[str] = None
    frame: FrameRect
    rotated: bool = False


class SheetMeta(BaseModel):
    image: str = Field(..., min_length=1)


class SheetDocument(BaseModel):
    """Parsed contents of a sprite sheet JSON file."""

    frames: Union[Dict[str, SheetFrame], List[SheetFrame]]
    meta: SheetMeta

    def named_frames(self):
        """Yield (filename, frame) pairs in file order."""
        if isinstance(self.frames, dict):
            yield from self.frames.items()
            return
        for index, frame in enumerate(self.frames):
            if not frame.filename:
                raise SheetFormatError(f"Frame #{index} has no filename")
            yield frame.filename, frame


def _sprite_name(filename):
    """
    Turn a frame file name into a sprite name relative to the atlas directory.

    Sub-folders are kept so that "walk/0.png" and "run/0.png" stay distinct;
    the extension and any "." or ".." components are dropped.
    """
    path = PurePosixPath(filename.replace("\\", "/"))
    folders = [part for part in path.parent.parts if part not in ("/", ".", "..")]
    return "/".join(folders + [path.stem])


def _region_from_frame(filename, frame):
    rect = frame.frame
    if frame.rotated:
        size = Size(rect.h, rect.w)
    else:
        size = Size(rect.w, rect.h)
    return RegionDescriptor(
        name=_sprite_name(filename),
        origin=Point(rect.x, rect.y),
        size=size,
        rotated=frame.rotated,
    )


def _is_sheet_document(document):
    return (
        isinstance(document, dict) and "frames" in document and "meta" in document
    )


def parse_sheet(document, sheet_path) -> AtlasDescriptor:
    """
    Build an AtlasDescriptor from an already decoded sheet document.

    Args:
        document: Decoded JSON object
        sheet_path: Path of the JSON file, used to resolve the texture path

    Raises:
        SheetFormatError: If the document does not follow the sheet schema
    """
    sheet_path = Path(sheet_path)
    try:
        sheet = SheetDocument.model_validate(document)
    except ValidationError as e:
        raise SheetFormatError(f"{sheet_path}: {e}") from e

    image_name = PurePosixPath(sheet.meta.image.replace("\\", "/"))
    texture = TextureHandle(
        path=sheet_path.parent / Path(*image_name.parts),
        texture_name=image_name.name,
        identifier=image_name.stem,
    )
    regions = [
        _region_from_frame(filename, frame) for filename, frame in sheet.named_frames()
    ]
    return AtlasDescriptor(
        name=sheet_path.stem,
        texture=texture,
        regions=tuple(regions),
        source_path=sheet_path,
    )


def load_sheet(sheet_path) -> AtlasDescriptor:
    """
    Load a single sprite sheet descriptor file.

    Args:
        sheet_path: Path to the sheet JSON file

    Returns:
        AtlasDescriptor for the sheet

    Raises:
        SheetFormatError: If the file cannot be read or is not a sprite sheet
    """
    sheet_path = Path(sheet_path)
    try:
        with open(sheet_path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise SheetFormatError(f"Could not read sprite sheet {sheet_path}: {e}") from e

    if not _is_sheet_document(document):
        raise SheetFormatError(f"{sheet_path} is not a sprite sheet descriptor")
    return parse_sheet(document, sheet_path)


def find_atlases(content_root, recursive=True) -> List[AtlasDescriptor]:
    """
    Find every sprite sheet under a content directory.

    JSON files that are not sprite sheets are ignored; sheets that fail to parse
    are skipped with a warning.

    Args:
        content_root: Directory to scan
        recursive: Also scan sub-directories

    Returns:
        List of AtlasDescriptor, ordered by descriptor path
    """
    root = Path(content_root)
    if not root.is_dir():
        logger.warning(f"Content root not found: {root}")
        return []

    pattern = "**/*.json" if recursive else "*.json"
    atlases = []
    for sheet_path in sorted(root.glob(pattern)):
        try:
            with open(sheet_path, "r", encoding="utf-8") as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.debug(f"Skipping {sheet_path}: {e}")
            continue

        if not _is_sheet_document(document):
            logger.debug(f"Skipping {sheet_path}: not a sprite sheet")
            continue

        try:
            atlases.append(parse_sheet(document, sheet_path))
        except SheetFormatError as e:
            logger.warning(f"Skipping malformed sprite sheet: {e}")

    logger.info(f"Found {len(atlases)} sprite sheet(s) under {root}")
    return atlases
