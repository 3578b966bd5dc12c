"""
02_clean.py
- Load the raw WRIA shapefile
- Rename/subset columns, CRS checks + geometry validity checks
- Save cleaned polygons into data/processed/wria_clean.parquet
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from wria import config, qc
from wria.cleaning import clean_wria
from wria.io import find_shapefile, load_shapefile, save_parquet, file_size_mb


def main():
    print("=" * 80)
    print("CLEAN WRIA BOUNDARIES")
    print("=" * 80)

    shp = find_shapefile(config.INPUT_FILES["shapefile_dir"], config.SHAPEFILE_NAME)
    if shp is None:
        print(f"ERROR: no shapefile in {config.INPUT_FILES['shapefile_dir']}; run 01_download.py first",
              file=sys.stderr)
        sys.exit(1)

    gdf_raw = load_shapefile(shp)
    print(f"\n[1/3] Loaded {shp.name}: {len(gdf_raw)} rows, CRS {gdf_raw.crs}")
    print(f"  Columns: {list(gdf_raw.columns)}")

    gdf, log = clean_wria(gdf_raw)
    config.print_log(log, "2/3 Cleaning")

    ok = qc.print_qc_report([
        ("Unique WRIA ids", qc.check_unique_ids, {"df": gdf}),
        ("Geometry validity", qc.check_geometry_validity, {"gdf": gdf}),
        ("Geometry types", qc.check_polygon_types, {"gdf": gdf}),
    ])
    if not ok:
        print("ERROR: QC failed; cleaned data not written", file=sys.stderr)
        sys.exit(1)

    out = save_parquet(gdf, config.OUTPUT_FILES["wria_clean"])
    print(f"\n[3/3] ✓ Saved {out} ({file_size_mb(out):.2f} MB)")


if __name__ == "__main__":
    main()
