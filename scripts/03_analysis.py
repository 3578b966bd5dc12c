"""
03_analysis.py
- Reproject cleaned WRIA polygons, compute area and centroids
- Summary statistics: largest WRIA, area quantile thresholds
- Export snapshots: boundaries + centroids (GeoJSON, EPSG:4326) and summary table (CSV)
"""

import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from wria import config, qc
from wria.io import load_parquet, save_geojson, save_csv
from wria.spatial import reproject, add_area, compute_centroids
from wria.stats import max_area, quantile_thresholds, subset_above_quantile, summarize


def main():
    print("=" * 80)
    print("WRIA ANALYSIS")
    print("=" * 80)

    clean_path = config.OUTPUT_FILES["wria_clean"]
    if not clean_path.exists():
        print(f"ERROR: {clean_path} not found; run 02_clean.py first", file=sys.stderr)
        sys.exit(1)

    gdf = load_parquet(clean_path)
    print(f"\n[1/5] Loaded {len(gdf)} WRIAs (CRS {gdf.crs})")

    # Area in metric CRS, geometry in web CRS
    gdf = add_area(gdf, config.CRS_METRIC)
    gdf_web, log = reproject(gdf, config.CRS_WEB)
    config.print_log(log, "2/5 Reprojection")

    print("\n[3/5] Statistics")
    largest = max_area(gdf_web)
    print(f"  Largest WRIA: {largest.get('wria_name', '')} (id {largest['wria_id']}): "
          f"{largest['area_km2']:,.1f} km²")
    for q, v in quantile_thresholds(gdf_web['area_km2']).items():
        print(f"  q{int(round(q * 100))}: {v:,.1f} km²")
    large = subset_above_quantile(gdf_web, config.LARGE_WRIA_QUANTILE)
    print(f"  WRIAs at or above q{int(config.LARGE_WRIA_QUANTILE * 100)}: {len(large)}")

    gdf_cent = compute_centroids(gdf, config.CRS_WEB)
    print(f"\n[4/5] Computed {len(gdf_cent)} centroids (in {config.CRS_METRIC}, exported as {config.CRS_WEB})")

    qc.print_qc_report([
        ("CRS", qc.check_crs, {"gdf": gdf_web, "expected_crs": config.CRS_WEB}),
        ("Positive area", qc.check_area_positive, {"gdf": gdf_web}),
        ("Centroids inside polygons", qc.check_centroids_within,
         {"gdf_polygons": gdf_web, "gdf_centroids": gdf_cent}),
    ])

    print("\n[5/5] Exporting snapshots")
    for key, data in [("wria_boundaries", gdf_web), ("wria_centroids", gdf_cent)]:
        out = save_geojson(data, config.OUTPUT_FILES[key])
        print(f"  ✓ {out}")
    out = save_csv(summarize(gdf_web), config.OUTPUT_FILES["wria_summary"])
    print(f"  ✓ {out}")


if __name__ == "__main__":
    main()
