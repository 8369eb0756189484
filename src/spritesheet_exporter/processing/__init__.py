"""
Pixel processing for atlas unpacking.
"""
