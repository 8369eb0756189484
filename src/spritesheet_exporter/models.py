"""
Pydantic models describing the outcome of an export run.

These models are what the export manager hands back to its callers: one entry
per written image, grouped per atlas and per batch.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, computed_field


class FailureReason(str, Enum):
    """Why an atlas or a single image could not be exported."""

    SOURCE_UNAVAILABLE = "source_unavailable"
    OUT_OF_BOUNDS = "out_of_bounds"
    ENCODE_FAILED = "encode_failed"
    WRITE_FAILED = "write_failed"
    INVALID_DESTINATION_PATH = "invalid_destination_path"


class ImageExportResult(BaseModel):
    """Outcome of writing one image (the full atlas or one sprite)."""

    name: str = Field(..., description="Sprite name, or texture name for the atlas")
    output_path: str = Field(..., description="Destination file path")
    width: int = Field(default=0, description="Declared width of the written image")
    height: int = Field(default=0, description="Declared height of the written image")
    success: bool = Field(default=True)
    reason: Optional[FailureReason] = Field(default=None)
    message: Optional[str] = Field(default=None)


class AtlasExportResult(BaseModel):
    """Outcome of exporting one atlas and all of its sprites."""

    atlas: str
    output_dir: str
    atlas_image: Optional[ImageExportResult] = None
    regions: List[ImageExportResult] = Field(default_factory=list)
    reason: Optional[FailureReason] = Field(
        default=None, description="Set when the atlas failed before any sprite was tried"
    )
    message: Optional[str] = None
    source_path: Optional[str] = Field(
        default=None, description="Sprite sheet descriptor the atlas was loaded from"
    )

    @computed_field
    @property
    def success(self) -> bool:
        if self.reason is not None:
            return False
        if self.atlas_image is None or not self.atlas_image.success:
            return False
        return all(region.success for region in self.regions)

    @property
    def failed_regions(self) -> List[ImageExportResult]:
        return [region for region in self.regions if not region.success]


class BatchExportResult(BaseModel):
    """Outcome of exporting a set of atlases."""

    atlases: List[AtlasExportResult] = Field(default_factory=list)

    @computed_field
    @property
    def success(self) -> bool:
        # An empty batch has nothing that failed.
        return all(atlas.success for atlas in self.atlases)

    @property
    def failed_atlases(self) -> List[AtlasExportResult]:
        return [atlas for atlas in self.atlases if not atlas.success]

    @property
    def exported_regions(self) -> int:
        return sum(
            1 for atlas in self.atlases for region in atlas.regions if region.success
        )
