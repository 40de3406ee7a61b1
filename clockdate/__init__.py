"""
clockdate - oversized glyph-art clock for desktop overlays and terminals
"""

__version__ = '0.1.0'
