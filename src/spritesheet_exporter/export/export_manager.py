"""
Export manager for packed atlases.

This module writes an atlas texture and every sprite packed into it out as PNG
files, one sub-directory per atlas. Exports are best-effort: a sprite or atlas
that fails is recorded in the results and the remaining work still runs.
"""

import logging
from pathlib import Path

from spritesheet_exporter import config
from spritesheet_exporter.errors import SpriteSheetExportError
from spritesheet_exporter.export.png_writer import PngWriter
from spritesheet_exporter.models import (
    AtlasExportResult,
    BatchExportResult,
    FailureReason,
    ImageExportResult,
)
from spritesheet_exporter.processing.region_extractor import declared_size, extract
from spritesheet_exporter.rendering.texture_loader import TextureLoader

logger = logging.getLogger("spritesheet_exporter.export.export_manager")


def atlas_image_filename(texture_name):
    """Return the file name the full atlas image is written under."""
    if texture_name.lower().endswith(".png"):
        return texture_name
    return f"{texture_name}.png"


class ExportManager:
    """
    Manages the export of atlases and their sprites.
    """

    def __init__(self, output_dir=None, texture_source=None, writer=None, pixel_format=None):
        """
        Initialize the export manager.

        Args:
            output_dir: Root directory receiving one sub-directory per atlas
            texture_source: Object providing get_base_level_pixels(handle), defaults
                to a TextureLoader
            writer: Object providing encode_and_write(...), defaults to a PngWriter
            pixel_format: Key of config.PIXEL_FORMATS describing the atlas pixels
        """
        self.output_dir = Path(output_dir or config.EXPORT_DIR)
        self.pixel_format = pixel_format or config.PIXEL_FORMAT
        if self.pixel_format not in config.PIXEL_FORMATS:
            raise ValueError(f"Unsupported pixel format '{self.pixel_format}'")
        self.texture_source = texture_source or TextureLoader(self.pixel_format)
        self.writer = writer or PngWriter()

    def _write_image(self, name, pixels, width, height, output_path):
        """Write one image and turn the outcome into a result entry."""
        try:
            self.writer.encode_and_write(
                pixels, width, height, self.pixel_format, output_path
            )
        except SpriteSheetExportError as e:
            logger.warning(f"Failed to export '{name}' to {output_path}: {e}")
            return ImageExportResult(
                name=name,
                output_path=str(output_path),
                width=width,
                height=height,
                success=False,
                reason=e.reason,
                message=str(e),
            )
        return ImageExportResult(
            name=name, output_path=str(output_path), width=width, height=height
        )

    def _export_region(self, pixels, region, atlas_dir, used_paths):
        output_path = atlas_dir / f"{region.name}.png"
        width, height = declared_size(region)
        if output_path in used_paths:
            message = f"{output_path} is already written by another image of this atlas"
            logger.warning(f"Failed to export '{region.name}': {message}")
            return ImageExportResult(
                name=region.name,
                output_path=str(output_path),
                width=width,
                height=height,
                success=False,
                reason=FailureReason.INVALID_DESTINATION_PATH,
                message=message,
            )
        used_paths.add(output_path)

        try:
            sprite = extract(pixels, region)
        except SpriteSheetExportError as e:
            logger.warning(f"Failed to extract '{region.name}': {e}")
            return ImageExportResult(
                name=region.name,
                output_path=str(output_path),
                width=width,
                height=height,
                success=False,
                reason=e.reason,
                message=str(e),
            )
        return self._write_image(
            region.name, sprite, sprite.width, sprite.height, output_path
        )

    def export_atlas(self, atlas):
        """
        Export one atlas: the full texture first, then each sprite in order.

        Args:
            atlas: AtlasDescriptor to export

        Returns:
            AtlasExportResult; its success is False if the texture could not be
            loaded or any single image failed
        """
        atlas_dir = self.output_dir / atlas.texture.identifier
        result = AtlasExportResult(
            atlas=atlas.name,
            output_dir=str(atlas_dir),
            source_path=str(atlas.source_path) if atlas.source_path else None,
        )

        try:
            pixels = self.texture_source.get_base_level_pixels(atlas.texture)
        except SpriteSheetExportError as e:
            logger.error(f"Texture for atlas '{atlas.name}' is unavailable: {e}")
            pixels = None
        if pixels is None:
            result.reason = FailureReason.SOURCE_UNAVAILABLE
            result.message = f"Could not load texture {atlas.texture.path}"
            logger.error(f"Skipping atlas '{atlas.name}': {result.message}")
            return result

        span = config.PIXEL_FORMATS[self.pixel_format][2]
        if pixels.bytes_per_pixel != span:
            result.reason = FailureReason.SOURCE_UNAVAILABLE
            result.message = (
                f"Texture {atlas.texture.path} has {pixels.bytes_per_pixel} bytes per "
                f"pixel, expected {span} for {self.pixel_format}"
            )
            logger.error(f"Skipping atlas '{atlas.name}': {result.message}")
            return result

        source = f" from {atlas.source_path}" if atlas.source_path else ""
        logger.info(
            f"Exporting atlas '{atlas.name}'{source} ({len(atlas.regions)} sprites) "
            f"to {atlas_dir}"
        )
        atlas_path = atlas_dir / atlas_image_filename(atlas.texture.texture_name)
        result.atlas_image = self._write_image(
            atlas.texture.texture_name, pixels, pixels.width, pixels.height, atlas_path
        )

        # Two images of one atlas must never land on the same file.
        used_paths = {atlas_path}
        for region in atlas.regions:
            result.regions.append(
                self._export_region(pixels, region, atlas_dir, used_paths)
            )

        if result.success:
            logger.info(f"Exported atlas '{atlas.name}'")
        else:
            logger.warning(
                f"Atlas '{atlas.name}' exported with "
                f"{len(result.failed_regions)} failed sprite(s)"
            )
        return result

    def export_atlases(self, atlases, progress_callback=None):
        """
        Export every atlas in order, continuing past failures.

        Args:
            atlases: Iterable of AtlasDescriptor
            progress_callback: Function to report progress (percentage, atlas name)

        Returns:
            BatchExportResult; its success is True only if every atlas succeeded
        """
        atlases = list(atlases)
        batch = BatchExportResult()
        for index, atlas in enumerate(atlases, start=1):
            batch.atlases.append(self.export_atlas(atlas))
            if progress_callback:
                progress_callback(int(index / len(atlases) * 100), atlas.name)

        logger.info(
            f"Exported {len(atlases) - len(batch.failed_atlases)}/{len(atlases)} "
            f"atlas(es), {batch.exported_regions} sprite(s)"
        )
        return batch


def export_atlas(atlas, output_dir=None, texture_source=None, writer=None, pixel_format=None):
    """
    Convenience function for exporting a single atlas.

    Returns:
        AtlasExportResult for the atlas
    """
    manager = ExportManager(
        output_dir=output_dir,
        texture_source=texture_source,
        writer=writer,
        pixel_format=pixel_format,
    )
    return manager.export_atlas(atlas)


def export_all(
    atlases,
    output_dir=None,
    texture_source=None,
    writer=None,
    pixel_format=None,
    progress_callback=None,
):
    """
    Convenience function for exporting a list of atlases.

    Returns:
        BatchExportResult for all atlases
    """
    manager = ExportManager(
        output_dir=output_dir,
        texture_source=texture_source,
        writer=writer,
        pixel_format=pixel_format,
    )
    return manager.export_atlases(atlases, progress_callback=progress_callback)


def export_all_atlases(content_root=None, output_dir=None, recursive=True, **kwargs):
    """
    Find every sprite sheet under a content root and export all of them.

    Args:
        content_root: Directory scanned for sheets, defaults to config.CONTENT_ROOT
        output_dir: Export root, defaults to config.EXPORT_DIR
        recursive: Also scan sub-directories of the content root
        **kwargs: Passed through to export_all

    Returns:
        BatchExportResult for all discovered atlases
    """
    from spritesheet_exporter.discovery import find_atlases

    atlases = find_atlases(content_root or config.CONTENT_ROOT, recursive=recursive)
    return export_all(atlases, output_dir=output_dir, **kwargs)
