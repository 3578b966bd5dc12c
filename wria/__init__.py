"""
WRIA Watershed Boundaries
Package for downloading, cleaning, reprojecting and mapping Washington State WRIA polygons.
"""

__version__ = "1.0.0"

# Lazy imports to avoid long startup times
# Import as needed in code

__all__ = ["config", "io", "cleaning", "spatial", "stats", "plotting", "qc"]
