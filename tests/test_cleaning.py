import pandas as pd
import pytest
import geopandas as gpd
from shapely.geometry import Polygon, box

from wria.cleaning import clean_wria, normalize_columns, rename_columns, subset_columns


def test_normalize_columns(raw_wria):
    gdf = normalize_columns(raw_wria.rename(columns={"WRIA_NM": "Wria Nm"}))
    assert "wria_nm" in gdf.columns
    assert "shape_area" in gdf.columns
    assert gdf.geometry.name == "geometry"


def test_rename_columns_reports_missing(raw_wria):
    gdf, log = rename_columns(normalize_columns(raw_wria), {"wria_nr": "wria_id", "basin": "basin_name"})
    assert "wria_id" in gdf.columns
    assert any("basin" in line for line in log)


def test_rename_moves_source_id_out_of_the_way(raw_wria):
    gdf, _ = rename_columns(normalize_columns(raw_wria))
    assert list(gdf["wria_id"]) == [1, 2, 3, 4, 5]
    assert list(gdf["source_id"]) == [11, 12, 13, 14, 15]


def test_subset_columns(raw_wria):
    gdf = subset_columns(raw_wria, ["WRIA_NR", "missing"])
    assert list(gdf.columns) == ["WRIA_NR", "geometry"]

    with pytest.raises(ValueError):
        subset_columns(raw_wria, ["missing"])


def test_clean_wria(raw_wria):
    gdf, log = clean_wria(raw_wria)

    assert list(gdf.columns) == ["wria_id", "wria_name", "wria_acres", "geometry"]
    assert gdf["wria_id"].dtype == "int64"
    assert gdf["wria_name"].iloc[0] == "Nooksack"
    assert gdf.crs == raw_wria.crs
    assert log[-1].startswith("✓ WRIA cleaning complete")


def test_clean_wria_requires_id(raw_wria):
    with pytest.raises(ValueError):
        clean_wria(raw_wria.drop(columns=["WRIA_NR"]))


def test_clean_wria_drops_empty_geometry(raw_wria):
    raw = raw_wria.copy()
    raw.loc[0, "geometry"] = None

    gdf, log = clean_wria(raw)
    assert len(gdf) == len(raw_wria) - 1
    assert any("missing geometry" in line for line in log)


def test_clean_wria_repairs_invalid_geometry(raw_wria):
    raw = raw_wria.copy()
    # bow-tie
    raw.loc[0, "geometry"] = Polygon([(0, 0), (10, 10), (10, 0), (0, 10)])

    gdf, log = clean_wria(raw)
    assert gdf.geometry.is_valid.all()
    assert any("repairing" in line for line in log)


def test_clean_wria_dissolves_duplicate_ids(raw_wria):
    extra = gpd.GeoDataFrame(
        {"WRIA_ID": [99], "WRIA_NR": [1], "WRIA_NM": ["Nooksack"], "WRIA_AREA_": [10.0],
         "Shape_Leng": [1.0], "Shape_Area": [1.0]},
        geometry=[box(1_500_000, 400_000, 1_510_000, 410_000)],
        crs=raw_wria.crs,
    )
    raw = gpd.GeoDataFrame(
        pd.concat([raw_wria, extra], ignore_index=True), crs=raw_wria.crs
    )

    gdf, log = clean_wria(raw)
    assert gdf["wria_id"].is_unique
    assert len(gdf) == len(raw_wria)
    nooksack = gdf[gdf["wria_id"] == 1].iloc[0]
    assert nooksack.geometry.geom_type == "MultiPolygon"
    assert nooksack["wria_acres"] == pytest.approx(raw_wria.loc[0, "WRIA_AREA_"] + 10.0)


def test_clean_wria_drops_geometry_collapsed_by_repair(raw_wria):
    raw = raw_wria.copy()
    # zero-area ring; buffer(0) turns it into POLYGON EMPTY
    raw.loc[0, "geometry"] = Polygon([(0, 0), (1, 1), (2, 2), (0, 0)])

    gdf, log = clean_wria(raw)
    assert not gdf.geometry.is_empty.any()
    assert 1 not in set(gdf["wria_id"])
    assert len(gdf) == len(raw_wria) - 1
    assert any("became empty" in line for line in log)


def test_clean_wria_drops_non_integer_ids(raw_wria):
    raw = raw_wria.copy()
    raw["WRIA_NR"] = raw["WRIA_NR"].astype(float)
    raw.loc[0, "WRIA_NR"] = 1.5

    gdf, log = clean_wria(raw)
    assert list(gdf["wria_id"]) == [2, 3, 4, 5]
    assert any("non-integer wria_id" in line for line in log)
