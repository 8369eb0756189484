"""
Sprite sheet discovery.

Locates sprite sheet descriptor files and turns them into atlas descriptors.
"""

from spritesheet_exporter.discovery.sheet_loader import find_atlases, load_sheet

__all__ = ["find_atlases", "load_sheet"]
