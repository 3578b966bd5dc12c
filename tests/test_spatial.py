import geopandas as gpd
import pandas as pd
import pytest

from wria import config
from wria.spatial import (
    add_area, compute_centroids, ensure_crs, join_attributes, reproject, representative_points,
)

# 1 US survey foot in metres
FT = 1200 / 3937


def test_ensure_crs(raw_wria):
    no_crs = gpd.GeoDataFrame(raw_wria.drop(columns="geometry"), geometry=list(raw_wria.geometry))
    assert ensure_crs(no_crs).crs == config.CRS_FALLBACK
    assert ensure_crs(raw_wria, "EPSG:4326").crs == raw_wria.crs


def test_reproject_to_wgs84(clean_wria_gdf):
    gdf, log = reproject(clean_wria_gdf, config.CRS_WEB)

    assert gdf.crs == config.CRS_WEB
    minx, miny, maxx, maxy = gdf.total_bounds
    assert -125 < minx < maxx < -116
    assert 45 < miny < maxy < 50
    assert "Reprojected" in log[0]
    # input untouched
    assert clean_wria_gdf.crs == "EPSG:2927"


def test_reproject_noop(clean_wria_gdf):
    gdf, log = reproject(clean_wria_gdf, "EPSG:2927")
    assert gdf.geometry.geom_equals(clean_wria_gdf.geometry).all()
    assert "no reprojection" in log[0]


def test_reproject_requires_crs(clean_wria_gdf):
    gdf = gpd.GeoDataFrame(clean_wria_gdf.drop(columns="geometry"), geometry=list(clean_wria_gdf.geometry))
    with pytest.raises(ValueError):
        reproject(gdf, config.CRS_WEB)


def test_add_area_in_metres(clean_wria_gdf):
    gdf = add_area(clean_wria_gdf)

    expected_km2 = (40_000 * FT) ** 2 / 1e6
    assert gdf.loc[0, "area_km2"] == pytest.approx(expected_km2, rel=0.01)
    assert gdf["area_m2"].iloc[-1] > gdf["area_m2"].iloc[0]
    assert gdf.crs == clean_wria_gdf.crs


def test_area_independent_of_input_crs(clean_wria_gdf):
    a = add_area(clean_wria_gdf)["area_km2"]
    b = add_area(clean_wria_gdf.to_crs(config.CRS_WEB))["area_km2"]
    assert a.values == pytest.approx(b.values, rel=1e-6)


def test_compute_centroids(clean_wria_gdf):
    cent = compute_centroids(clean_wria_gdf)

    assert cent.crs == config.CRS_WEB
    assert len(cent) == len(clean_wria_gdf)
    assert set(cent.geom_type) == {"Point"}
    assert list(cent["wria_id"]) == list(clean_wria_gdf["wria_id"])
    assert (cent["lon"] == cent.geometry.x).all()

    polys = clean_wria_gdf.to_crs(config.CRS_WEB).geometry
    assert cent.geometry.within(polys).all()


def test_representative_points(clean_wria_gdf):
    pts = representative_points(clean_wria_gdf)
    assert pts.geometry.within(clean_wria_gdf.geometry).all()
    assert pts.crs == clean_wria_gdf.crs


def test_join_attributes(clean_wria_gdf):
    table = pd.DataFrame({"wria_id": [1, 2, 42], "region": ["NW", "NW", "??"]})
    gdf, log = join_attributes(clean_wria_gdf, table, on="wria_id")

    assert len(gdf) == len(clean_wria_gdf)
    assert gdf.loc[gdf["wria_id"] == 1, "region"].iloc[0] == "NW"
    assert gdf["region"].isna().sum() == 3
    assert "2 / 5" in log[0]


def test_join_attributes_rejects_duplicate_keys(clean_wria_gdf):
    table = pd.DataFrame({"wria_id": [1, 1], "region": ["a", "b"]})
    with pytest.raises(ValueError):
        join_attributes(clean_wria_gdf, table, on="wria_id")


def test_join_attributes_missing_key(clean_wria_gdf):
    with pytest.raises(ValueError):
        join_attributes(clean_wria_gdf, pd.DataFrame({"x": [1]}), on="wria_id")
