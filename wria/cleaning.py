"""
Cleaning module: column normalization, renaming/subsetting and geometry checks for WRIA polygons.
"""

import pandas as pd
from . import config


def normalize_columns(gdf):
    """Lower-case column names and replace spaces with underscores (geometry column kept)."""
    gdf = gdf.copy()
    geom_name = gdf.geometry.name
    mapping = {col: col.strip().lower().replace(' ', '_') for col in gdf.columns if col != geom_name}
    gdf = gdf.rename(columns=mapping)
    return gdf


def rename_columns(gdf, mapping=None):
    """
    Apply a rename mapping to the columns that are present.

    Args:
        gdf: GeoDataFrame with normalized column names
        mapping: dict old -> new (default: config.COLUMN_RENAMES)

    Returns:
        Renamed GeoDataFrame and log info
    """
    log = []
    mapping = config.COLUMN_RENAMES if mapping is None else mapping

    present = {old: new for old, new in mapping.items() if old in gdf.columns}
    missing = [old for old in mapping if old not in gdf.columns]

    gdf = gdf.rename(columns=present)
    for old, new in present.items():
        log.append(f"✓ Renamed '{old}' to '{new}'")
    if missing:
        log.append(f"⚠️  Columns not found (not renamed): {missing}")

    return gdf, log


def subset_columns(gdf, keep=None):
    """
    Keep the requested attribute columns that exist, plus geometry.

    Args:
        gdf: GeoDataFrame
        keep: List of attribute columns (default: config.KEEP_COLUMNS)

    Returns:
        Subsetted GeoDataFrame
    """
    keep = config.KEEP_COLUMNS if keep is None else keep
    cols = [c for c in keep if c in gdf.columns]
    if not cols:
        raise ValueError(f"None of the requested columns {keep} found in {list(gdf.columns)}")

    return gdf[cols + [gdf.geometry.name]].copy()


def clean_wria(gdf_raw, mapping=None, keep=None):
    """
    Clean WRIA polygons: normalize/rename/subset columns, fix ids and geometries.

    Args:
        gdf_raw: Raw WRIA GeoDataFrame (as read from the shapefile)
        mapping: Column rename mapping
        keep: Columns to keep

    Returns:
        Cleaned GeoDataFrame and log info
    """
    log = []

    # 1. Normalize column names
    gdf = normalize_columns(gdf_raw)
    log.append(f"✓ Column names normalized")

    # 2. Rename
    gdf, rename_log = rename_columns(gdf, mapping)
    log += rename_log

    if 'wria_id' not in gdf.columns:
        raise ValueError(f"'wria_id' column not found after renaming; columns: {list(gdf.columns)}")

    # 3. Subset
    keep = config.KEEP_COLUMNS if keep is None else keep
    if 'wria_id' not in keep:
        keep = ['wria_id'] + list(keep)
    gdf = subset_columns(gdf, keep)
    log.append(f"✓ Kept columns: {[c for c in gdf.columns if c != 'geometry']}")

    # 4. CRS
    if gdf.crs is None:
        log.append(f"⚠️  CRS missing; assuming {config.CRS_FALLBACK}")
        gdf = gdf.set_crs(config.CRS_FALLBACK)
    else:
        log.append(f"✓ CRS: {gdf.crs.to_string()}")

    # 5. Drop null / empty geometries
    before = len(gdf)
    gdf = gdf[gdf.geometry.notna() & ~gdf.geometry.is_empty].copy()
    removed = before - len(gdf)
    if removed > 0:
        log.append(f"⚠️  Removed {removed} rows with missing geometry")

    # 6. wria_id as int64
    gdf['wria_id'] = pd.to_numeric(gdf['wria_id'], errors='coerce')
    null_ids = gdf['wria_id'].isnull().sum()
    if null_ids > 0:
        log.append(f"⚠️  Removed {null_ids} rows with non-numeric wria_id")
        gdf = gdf[gdf['wria_id'].notna()].copy()
    fractional = (gdf['wria_id'] % 1 != 0).sum()
    if fractional > 0:
        log.append(f"⚠️  Removed {fractional} rows with non-integer wria_id")
        gdf = gdf[gdf['wria_id'] % 1 == 0].copy()
    gdf['wria_id'] = gdf['wria_id'].astype('int64')

    if 'wria_name' in gdf.columns:
        gdf['wria_name'] = gdf['wria_name'].astype(str).str.strip()

    # 7. Repair invalid geometries
    invalid_before = (~gdf.geometry.is_valid).sum()
    if invalid_before > 0:
        log.append(f"⚠️  Found {invalid_before} invalid geometries; repairing...")
        gdf.geometry = gdf.geometry.buffer(0)
        invalid_after = (~gdf.geometry.is_valid).sum()
        log.append(f"   → After repair: {invalid_after} invalid (target: 0)")
        assert invalid_after == 0, "Failed to repair geometries!"
        collapsed = gdf.geometry.is_empty.sum()
        if collapsed > 0:
            log.append(f"⚠️  Removed {collapsed} geometries that became empty after repair")
            gdf = gdf[~gdf.geometry.is_empty].copy()
    else:
        log.append(f"✓ All geometries are valid")

    # 8. Dissolve multi-part WRIAs stored as several rows
    dup_ids = gdf['wria_id'].duplicated().sum()
    if dup_ids > 0:
        agg = {c: 'first' for c in gdf.columns if c not in ('wria_id', gdf.geometry.name)}
        if 'wria_acres' in agg:
            agg['wria_acres'] = 'sum'
        gdf = gdf.dissolve(by='wria_id', aggfunc=agg or 'first', as_index=False)
        log.append(f"⚠️  Dissolved {dup_ids} duplicate wria_id rows into multi-part polygons")

    gdf = gdf.sort_values('wria_id').reset_index(drop=True)

    log.append(f"✓ WRIA cleaning complete: {gdf_raw.shape} → {gdf.shape}")

    return gdf, log
