"""
Configuration module: paths, data source, CRS constants, and global settings.
"""

from pathlib import Path
import os

# ============================================================================
# PROJECT PATHS (all relative to PROJECT_ROOT)
# ============================================================================

def get_project_root():
    """Auto-detect project root by checking for the wria/ package folder."""
    env_root = os.getenv("WRIA_PROJECT_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    cwd = Path.cwd()

    # If already in project root
    if (cwd / "wria").is_dir():
        return cwd

    # If in notebooks/ or scripts/
    if cwd.name in ["notebooks", "scripts"] and (cwd.parent / "wria").is_dir():
        return cwd.parent

    # Fallback: the checkout this module lives in
    return Path(__file__).resolve().parent.parent

PROJECT_ROOT = get_project_root()

# Core data paths
DATA_DIR = PROJECT_ROOT / "data"
RAW_DIR = DATA_DIR / "raw"
PROCESSED_DIR = DATA_DIR / "processed"
OUTPUTS_DIR = PROJECT_ROOT / "outputs"
FIGURES_DIR = PROJECT_ROOT / "reports" / "figures"

# Create directories if missing
RAW_DIR.mkdir(parents=True, exist_ok=True)
PROCESSED_DIR.mkdir(parents=True, exist_ok=True)
OUTPUTS_DIR.mkdir(parents=True, exist_ok=True)
FIGURES_DIR.mkdir(parents=True, exist_ok=True)

# ============================================================================
# DATA SOURCE (Washington Department of Ecology, public domain)
# ============================================================================

WRIA_URL = os.getenv("WRIA_URL", "ftp://www.ecy.wa.gov/gis_a/hydro/wria.zip")
ARCHIVE_NAME = "wria.zip"
SHAPEFILE_NAME = "WRIA_poly.shp"

INPUT_FILES = {
    "archive": RAW_DIR / ARCHIVE_NAME,
    "shapefile_dir": RAW_DIR / "wria",
}

# Output files (processed)
OUTPUT_FILES = {
    "wria_clean": PROCESSED_DIR / "wria_clean.parquet",
    "wria_boundaries": PROCESSED_DIR / "wria_boundaries.geojson",
    "wria_centroids": PROCESSED_DIR / "wria_centroids.geojson",
    "wria_summary": OUTPUTS_DIR / "wria_summary.csv",
    "wria_webmap": OUTPUTS_DIR / "wria_webmap.html",
}

# ============================================================================
# GEOSPATIAL & CRS CONSTANTS
# ============================================================================

# Web mapping CRS (WGS84 - standard for all web outputs and plots)
CRS_WEB = "EPSG:4326"

# Metric CRS for Washington (area/centroid calculations)
CRS_METRIC = "EPSG:2855"  # NAD83(HARN) / Washington North (metres)

# Ecology publishes in State Plane South (US feet); assumed when the .prj is missing
CRS_FALLBACK = "EPSG:2927"

# ============================================================================
# SCHEMA
# ============================================================================

# Raw shapefile field (after lower-casing) -> clean name
COLUMN_RENAMES = {
    "wria_id": "source_id",  # feature id in the source; the WRIA number is wria_nr
    "wria_nr": "wria_id",
    "wria_nm": "wria_name",
    "wria_area_": "wria_acres",
    "shape_area": "source_area",
    "shape_leng": "source_perimeter",
}

KEEP_COLUMNS = ["wria_id", "wria_name", "wria_acres"]

# ============================================================================
# ANALYSIS SETTINGS
# ============================================================================

AREA_QUANTILES = [0.25, 0.5, 0.75]
LARGE_WRIA_QUANTILE = 0.75

# Quantile class colours (Q1 -> Q4, light -> dark)
CLASS_COLORS = ["#eff3ff", "#bdd7e7", "#6baed6", "#2171b5"]
HIGHLIGHT_COLOR = "#cb181d"

FIGURE_DPI = 300
FIGURE_SIZE = (12, 8)

# ============================================================================
# LOGGING & VERBOSITY
# ============================================================================

VERBOSE = True

def print_log(log, title=None):
    """Print a list of status lines returned by the processing functions."""
    if not VERBOSE:
        return
    if title:
        print(f"\n[{title}]")
    for line in log:
        print(f"  {line}")

def print_config():
    """Print all configuration settings."""
    print("\n" + "=" * 80)
    print("PIPELINE CONFIGURATION")
    print("=" * 80)
    print(f"\n📁 PROJECT ROOT: {PROJECT_ROOT}")
    print(f"📂 RAW DIR: {RAW_DIR}")
    print(f"📂 PROCESSED DIR: {PROCESSED_DIR}")
    print(f"📂 OUTPUTS DIR: {OUTPUTS_DIR}")
    print(f"\n🌐 SOURCE: {WRIA_URL}")
    print(f"\n🗺️  CRS Settings:")
    print(f"   Web (output): {CRS_WEB}")
    print(f"   Metric (calculations): {CRS_METRIC}")
    print(f"   Fallback (missing .prj): {CRS_FALLBACK}")
    print(f"\n✓ Configuration loaded successfully")
    print("=" * 80 + "\n")
