"""
Spatial module: CRS handling, reprojection, area and centroid calculations, attribute joins.
"""

import geopandas as gpd
from . import config


def ensure_crs(gdf, default=None):
    """Assign a CRS when missing (default: config.CRS_FALLBACK)."""
    if gdf.crs is None:
        return gdf.set_crs(default or config.CRS_FALLBACK)
    return gdf


def reproject(gdf, crs):
    """
    Reproject a GeoDataFrame to the target CRS.

    Args:
        gdf: GeoDataFrame (CRS must be set)
        crs: Target CRS (e.g. 'EPSG:4326')

    Returns:
        Reprojected GeoDataFrame and log info
    """
    log = []

    if gdf.crs is None:
        raise ValueError("Cannot reproject a GeoDataFrame without CRS; call ensure_crs() first")

    if gdf.crs == crs:
        log.append(f"✓ Already in {crs}; no reprojection needed")
        return gdf.copy(), log

    src = gdf.crs.to_string()
    gdf_out = gdf.to_crs(crs)

    minx, miny, maxx, maxy = gdf_out.total_bounds
    log.append(f"✓ Reprojected {len(gdf_out)} features: {src} → {crs}")
    log.append(f"  - Bounds: ({minx:.4f}, {miny:.4f}) – ({maxx:.4f}, {maxy:.4f})")

    return gdf_out, log


def add_area(gdf, crs=None):
    """
    Add 'area_m2' and 'area_km2' columns, measured in a metric CRS.

    The returned frame keeps the CRS of the input.
    """
    crs = crs or config.CRS_METRIC
    gdf = gdf.copy()
    gdf['area_m2'] = ensure_crs(gdf).to_crs(crs).geometry.area.values
    gdf['area_km2'] = gdf['area_m2'] / 1e6
    return gdf


def compute_centroids(gdf, crs_out=None, crs_metric=None):
    """
    Compute polygon centroids.

    Centroids are computed in the metric CRS, then reprojected to crs_out.

    Args:
        gdf: Polygon GeoDataFrame
        crs_out: CRS of the returned points (default: config.CRS_WEB)
        crs_metric: CRS used for the calculation (default: config.CRS_METRIC)

    Returns:
        Point GeoDataFrame with the attribute columns and 'lon'/'lat' (x/y in crs_out)
    """
    crs_out = crs_out or config.CRS_WEB
    crs_metric = crs_metric or config.CRS_METRIC

    gdf_metric = ensure_crs(gdf).to_crs(crs_metric)
    attrs = gdf_metric.drop(columns=gdf_metric.geometry.name)

    gdf_cent = gpd.GeoDataFrame(attrs, geometry=gdf_metric.geometry.centroid, crs=crs_metric)
    gdf_cent = gdf_cent.to_crs(crs_out)
    gdf_cent['lon'] = gdf_cent.geometry.x
    gdf_cent['lat'] = gdf_cent.geometry.y

    return gdf_cent


def representative_points(gdf):
    """Points guaranteed to fall inside each polygon (useful for labels)."""
    attrs = gdf.drop(columns=gdf.geometry.name)
    return gpd.GeoDataFrame(attrs, geometry=gdf.geometry.representative_point(), crs=gdf.crs)


def join_attributes(gdf, table, on, how='left'):
    """
    Join a plain attribute table onto polygons.

    Args:
        gdf: Polygon GeoDataFrame
        table: pd.DataFrame with one row per key
        on: Key column present in both
        how: 'left' (keep every polygon) or 'inner'

    Returns:
        GeoDataFrame with table columns added and log info
    """
    log = []

    if on not in gdf.columns or on not in table.columns:
        raise ValueError(f"Join key '{on}' must exist in both tables")

    dup = table[on].duplicated().sum()
    if dup > 0:
        raise ValueError(f"Join key '{on}' is not unique in table ({dup} duplicates)")

    gdf_joined = gdf.merge(table, on=on, how=how)

    matched = gdf[on].isin(table[on]).sum()
    log.append(f"✓ Attribute join on '{on}': {matched:,} / {len(gdf):,} polygons matched")
    if matched < len(gdf) and how == 'left':
        log.append(f"⚠️  {len(gdf) - matched} polygons without attributes (NaN)")

    return gdf_joined, log
