#!/usr/bin/env python3
"""Render the static WRIA maps.

Outputs (reports/figures/, 300 dpi):
 - fig_wria_boundaries.png
 - fig_wria_area.png
 - fig_wria_area_quantiles.png
 - fig_wria_largest.png
 - fig_wria_centroids.png
 - fig_wria_area_distribution.png

Reads `data/processed/wria_boundaries.geojson` and `wria_centroids.geojson` (run 03_analysis.py first).
"""
import sys
from pathlib import Path

import matplotlib
matplotlib.use("Agg")

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from wria import config, plotting
from wria.io import load_geojson


def main():
    boundaries = config.OUTPUT_FILES["wria_boundaries"]
    centroids = config.OUTPUT_FILES["wria_centroids"]
    for path in (boundaries, centroids):
        if not path.exists():
            print(f"ERROR: {path} not found; run 03_analysis.py first", file=sys.stderr)
            sys.exit(1)

    gdf = load_geojson(boundaries)
    gdf_cent = load_geojson(centroids)

    figures = {
        "fig_wria_boundaries.png": plotting.plot_boundaries(gdf, labels=True),
        "fig_wria_area.png": plotting.plot_area_choropleth(gdf),
        "fig_wria_area_quantiles.png": plotting.plot_quantile_classes(gdf),
        "fig_wria_largest.png": plotting.plot_largest(gdf),
        "fig_wria_centroids.png": plotting.plot_centroids(gdf, gdf_cent),
        "fig_wria_area_distribution.png": plotting.plot_area_distribution(gdf),
    }
    for name, (fig, _) in figures.items():
        out = plotting.save_figure(fig, config.FIGURES_DIR / name)
        print(f"Saved figure to: {out}")


if __name__ == "__main__":
    main()
