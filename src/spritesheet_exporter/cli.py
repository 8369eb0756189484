"""
Command-line interface for Spritesheet Exporter.

Console commands:
- ExportAllAtlas [output_dir]: export every sprite sheet under the content root
- ExportAtlas <sheet.json> [output_dir]: export a single sprite sheet
"""

import argparse
import logging
import shlex
import sys

from spritesheet_exporter import config
from spritesheet_exporter.discovery import load_sheet
from spritesheet_exporter.errors import SheetFormatError
from spritesheet_exporter.export.export_manager import (
    ExportManager,
    export_all_atlases,
)
from spritesheet_exporter.models import BatchExportResult

logger = logging.getLogger("spritesheet_exporter.cli")

COMMAND_EXPORT_ALL = "ExportAllAtlas"
COMMAND_EXPORT_ONE = "ExportAtlas"


def print_summary(batch):
    """Print the outcome of an export run to the console."""
    for atlas in batch.atlases:
        if atlas.success:
            print(f"[ok]     {atlas.atlas}: {len(atlas.regions)} sprite(s) -> {atlas.output_dir}")
            continue
        if atlas.reason is not None:
            print(f"[failed] {atlas.atlas}: {atlas.message}")
            continue
        print(f"[failed] {atlas.atlas}: {len(atlas.failed_regions)} sprite(s) failed")
        if atlas.atlas_image is not None and not atlas.atlas_image.success:
            print(f"         atlas image: {atlas.atlas_image.message}")
        for region in atlas.failed_regions:
            print(f"         {region.name}: {region.message}")

    if batch.success:
        print(f"Export finished: {len(batch.atlases)} atlas(es) exported.")
    else:
        print(
            f"Export failed: {len(batch.failed_atlases)} of {len(batch.atlases)} "
            f"atlas(es) had errors."
        )


def run_export_all(output_dir=None, content_root=None, recursive=True):
    """Export all sprite sheets found under the content root."""
    content_root = content_root or config.CONTENT_ROOT
    output_dir = output_dir or config.EXPORT_DIR
    logger.info(f"Exporting all atlases under {content_root} to {output_dir}")
    batch = export_all_atlases(
        content_root=content_root, output_dir=output_dir, recursive=recursive
    )
    print_summary(batch)
    return batch


def run_export_one(sheet_path, output_dir=None):
    """Export a single sprite sheet."""
    try:
        atlas = load_sheet(sheet_path)
    except SheetFormatError as e:
        logger.error(str(e))
        print(f"Error: {e}")
        return BatchExportResult()

    manager = ExportManager(output_dir=output_dir or config.EXPORT_DIR)
    batch = manager.export_atlases([atlas])
    print_summary(batch)
    return batch


def execute_command(command, content_root=None, recursive=True):
    """
    Run a console command line.

    Args:
        command: Command line, e.g. "ExportAllAtlas ./out"
        content_root: Directory scanned by ExportAllAtlas
        recursive: Also scan sub-directories of the content root

    Returns:
        True if the command was recognised and run, False otherwise. A
        recognised command returns True even when the export itself fails.
    """
    tokens = shlex.split(command)
    if not tokens:
        return False

    token, args = tokens[0], tokens[1:]
    if token == COMMAND_EXPORT_ALL:
        output_dir = args[0] if args else None
        run_export_all(output_dir, content_root=content_root, recursive=recursive)
    elif token == COMMAND_EXPORT_ONE:
        if not args:
            print(f"Usage: {COMMAND_EXPORT_ONE} <sheet.json> [output_dir]")
            return True
        output_dir = args[1] if len(args) > 1 else None
        run_export_one(args[0], output_dir)
    else:
        return False

    return True


def main(argv=None):
    """
    Main entry point with command-line argument parsing.

    Returns:
        Process exit status: 0 when everything exported, 1 otherwise
    """
    parser = argparse.ArgumentParser(
        description="Unpack sprites from texture atlases into individual PNG files"
    )

    parser.add_argument(
        "command",
        nargs="?",
        default=COMMAND_EXPORT_ALL,
        choices=[COMMAND_EXPORT_ALL, COMMAND_EXPORT_ONE],
        help="ExportAllAtlas (default) or ExportAtlas",
    )

    parser.add_argument(
        "sheet",
        nargs="?",
        help="Sprite sheet JSON file (only applicable to ExportAtlas)",
    )

    parser.add_argument(
        "--content-root",
        default=config.CONTENT_ROOT,
        help="Directory scanned for sprite sheets",
    )

    parser.add_argument(
        "--output",
        default=config.EXPORT_DIR,
        help="Root directory for exported images",
    )

    parser.add_argument(
        "--no-recursive",
        action="store_true",
        help="Only scan the top level of the content root",
    )

    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        default="info",
        help="Logging level",
    )

    args = parser.parse_args(argv)

    # Configure logging
    numeric_level = getattr(logging, args.log_level.upper(), None)
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.command == COMMAND_EXPORT_ONE:
        if not args.sheet:
            parser.error("ExportAtlas requires a sprite sheet path")
        batch = run_export_one(args.sheet, args.output)
        # An unreadable sheet yields an empty batch, which is still a failure here.
        return 0 if batch.atlases and batch.success else 1

    batch = run_export_all(
        args.output, content_root=args.content_root, recursive=not args.no_recursive
    )
    return 0 if batch.success else 1


if __name__ == "__main__":
    sys.exit(main())
