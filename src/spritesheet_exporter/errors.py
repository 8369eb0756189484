"""
Exception types raised while unpacking and exporting sprite sheets.

Each export error carries the FailureReason that ends up in the export results,
so the export manager can turn a caught exception straight into a result entry.
"""

from spritesheet_exporter.models import FailureReason


class SpriteSheetExportError(Exception):
    """Base class for every error raised by this package."""

    reason = None


class SourceUnavailableError(SpriteSheetExportError):
    """The atlas texture pixels could not be loaded."""

    reason = FailureReason.SOURCE_UNAVAILABLE


class OutOfBoundsError(SpriteSheetExportError):
    """A region reaches outside the atlas it belongs to."""

    reason = FailureReason.OUT_OF_BOUNDS


class EncodeFailedError(SpriteSheetExportError):
    """The pixel data could not be encoded as an image."""

    reason = FailureReason.ENCODE_FAILED


class WriteFailedError(SpriteSheetExportError):
    """The encoded image could not be written to disk."""

    reason = FailureReason.WRITE_FAILED


class InvalidDestinationPathError(SpriteSheetExportError):
    """The output path was rejected before anything was encoded."""

    reason = FailureReason.INVALID_DESTINATION_PATH


class SheetFormatError(SpriteSheetExportError):
    """A sprite sheet descriptor file could not be parsed."""
