import os
import tempfile

import matplotlib
import pytest
import geopandas as gpd
from shapely.geometry import box

# keep config's directory creation out of the checkout
os.environ.setdefault("WRIA_PROJECT_ROOT", tempfile.mkdtemp(prefix="wria-test-"))
matplotlib.use("Agg")

# Lower-left corners (EPSG:2927, US feet) and side lengths of the synthetic WRIAs
SQUARES = [
    (1, "Nooksack", 1_600_000, 500_000, 40_000),
    (2, "San Juan", 1_700_000, 500_000, 50_000),
    (3, "Skagit-Samish", 1_800_000, 500_000, 60_000),
    (4, "Upper Skagit", 1_600_000, 600_000, 80_000),
    (5, "Stillaguamish", 1_700_000, 600_000, 100_000),
]


@pytest.fixture
def raw_wria():
    """GeoDataFrame shaped like the Ecology shapefile (upper-case fields)."""
    geoms = [box(x, y, x + side, y + side) for _, _, x, y, side in SQUARES]
    return gpd.GeoDataFrame(
        {
            "WRIA_ID": [10 + i for i, *_ in SQUARES],
            "WRIA_NR": [i for i, *_ in SQUARES],
            "WRIA_NM": [f" {name} " for _, name, *_ in SQUARES],
            "WRIA_AREA_": [side * side / 43_560 for *_, side in SQUARES],
            "Shape_Leng": [4 * side for *_, side in SQUARES],
            "Shape_Area": [side * side for *_, side in SQUARES],
        },
        geometry=geoms,
        crs="EPSG:2927",
    )


@pytest.fixture
def clean_wria_gdf(raw_wria):
    from wria.cleaning import clean_wria

    gdf, _ = clean_wria(raw_wria)
    return gdf


@pytest.fixture
def wria_with_area(clean_wria_gdf):
    from wria.spatial import add_area

    return add_area(clean_wria_gdf)
