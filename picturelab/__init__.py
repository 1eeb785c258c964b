"""Raster image editing: flips, blur, tile equalisation, an edit history and PNG export."""

__version__ = "0.1.0"
__all__ = ["history", "images", "pngexport", "processing", "textformat"]