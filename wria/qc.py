"""
Quality Control (QC) module: Assertions and data quality checks.
"""

def check_unique_ids(df, id_col='wria_id'):
    """Assert IDs are unique (no duplicates)."""
    assert df[id_col].duplicated().sum() == 0, f"Duplicate {id_col} values found!"
    assert df[id_col].isnull().sum() == 0, f"Null {id_col} values found!"
    return f"✓ {id_col} is unique (n={len(df)})"

def check_geometry_validity(gdf):
    """Assert all geometries are valid."""
    assert (~gdf.geometry.is_valid).sum() == 0, "Found invalid geometries!"
    assert gdf.geometry.is_empty.sum() == 0, "Found empty geometries!"
    return f"✓ All {len(gdf)} geometries are valid"

def check_crs(gdf, expected_crs='EPSG:4326'):
    """Assert CRS matches expected."""
    assert gdf.crs == expected_crs, f"CRS mismatch: {gdf.crs} != {expected_crs}"
    return f"✓ CRS is {expected_crs}"

def check_polygon_types(gdf):
    """Assert every geometry is a Polygon or MultiPolygon."""
    types = set(gdf.geometry.geom_type.unique())
    assert types <= {'Polygon', 'MultiPolygon'}, f"Unexpected geometry types: {types}"
    return f"✓ Geometry types: {sorted(types)}"

def check_area_positive(gdf, area_col='area_km2'):
    """Assert all areas are strictly positive."""
    if area_col not in gdf.columns:
        return f"⚠️  {area_col} column not found"

    assert (gdf[area_col] > 0).all(), f"Non-positive values in {area_col}"
    return f"✓ {area_col} > 0 (range {gdf[area_col].min():,.1f} – {gdf[area_col].max():,.1f})"

def check_centroids_within(gdf_polygons, gdf_centroids, min_share=0.9):
    """Assert most centroids fall inside their polygon (concave shapes may not)."""
    polys = gdf_polygons.to_crs(gdf_centroids.crs).geometry.reset_index(drop=True)
    points = gdf_centroids.geometry.reset_index(drop=True)
    inside = points.within(polys)
    share = inside.mean() if len(inside) > 0 else 0

    assert share >= min_share, f"Only {share:.1%} of centroids inside their polygon (< {min_share:.0%})"
    return f"✓ Centroids inside polygon: {inside.sum()} / {len(inside)} ({share:.1%})"

def print_qc_report(checks):
    """
    Print formatted QC report.

    Args:
        checks: List of (name, check_func, kwargs) tuples
    """
    print("\n" + "=" * 80)
    print("QUALITY CONTROL REPORT")
    print("=" * 80)

    passed = True
    for name, check_func, kwargs in checks:
        try:
            result = check_func(**kwargs)
            print(f"\n{name}")
            print(f"  {result}")
        except AssertionError as e:
            passed = False
            print(f"\n❌ {name}")
            print(f"  ERROR: {e}")
        except Exception as e:
            print(f"\n⚠️  {name}")
            print(f"  WARNING: {e}")

    print("\n" + "=" * 80)
    return passed
