"""
Texture loading.
"""
