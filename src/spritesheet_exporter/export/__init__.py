"""
Export functionality for unpacked atlases.

This module provides tools for writing an atlas texture and every sprite packed
into it out as individual PNG files.
"""
