"""
05_webmap.py
- Write an interactive folium map of the WRIA boundaries to outputs/wria_webmap.html
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from wria import config
from wria.io import load_geojson
from wria.plotting import make_webmap


def main():
    boundaries = config.OUTPUT_FILES["wria_boundaries"]
    if not boundaries.exists():
        print(f"ERROR: {boundaries} not found; run 03_analysis.py first", file=sys.stderr)
        sys.exit(1)

    make_webmap(load_geojson(boundaries), config.OUTPUT_FILES["wria_webmap"])
    print(f"✓ Web map written to {config.OUTPUT_FILES['wria_webmap']}")


if __name__ == "__main__":
    main()
