"""
01_download.py
- Download the WRIA shapefile archive (skipped if already present)
- Unzip it into data/raw/wria/ (skipped if already extracted)
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from wria import config
from wria.io import fetch_wria


def main():
    config.print_config()

    print("=" * 80)
    print("DOWNLOAD WRIA BOUNDARIES")
    print("=" * 80)

    shp, log = fetch_wria(config.WRIA_URL, config.RAW_DIR)
    config.print_log(log, "1/1 Fetch")

    print(f"\n✓ Raw data ready: {shp}")


if __name__ == "__main__":
    main()
