"""
Ingestion package — image files to raster buffers.

Decodes uploaded slices with Pillow and applies the resize bounds from
settings before handing pixels to the analysis engine.
"""

from ctmri_analyzer.ingestion.image_loader import image_to_raster, load_raster, target_size

__all__ = ["image_to_raster", "load_raster", "target_size"]
