"""
Spritesheet Exporter - unpacks sprites from packed texture atlases.
"""

__version__ = "0.1.0"
