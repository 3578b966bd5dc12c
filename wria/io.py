"""
I/O module: download and unzip the WRIA archive, load and save data in various formats.
"""

import shutil
import urllib.request
import warnings
import zipfile
from pathlib import Path
from urllib.parse import urlparse

import pandas as pd
import geopandas as gpd
import requests

from . import config

CHUNK_SIZE = 1024 * 1024


def download_archive(url, dest, overwrite=False, timeout=60):
    """
    Download a zip archive unless it already exists.

    Args:
        url: http(s) or ftp URL of the archive
        dest: Local path of the archive
        overwrite: Re-download even if dest exists
        timeout: Socket timeout in seconds

    Returns:
        Path to the archive and log info
    """
    log = []
    dest = Path(dest)

    if dest.exists() and not overwrite:
        log.append(f"✓ Archive already present, skipping download: {dest.name} ({file_size_mb(dest):.2f} MB)")
        return dest, log

    dest.parent.mkdir(parents=True, exist_ok=True)
    tmp = dest.with_name(dest.name + ".part")

    scheme = urlparse(url).scheme.lower()
    try:
        if scheme in ("http", "https"):
            with requests.get(url, stream=True, timeout=timeout) as r:
                r.raise_for_status()
                with open(tmp, "wb") as f:
                    for chunk in r.iter_content(chunk_size=CHUNK_SIZE):
                        f.write(chunk)
        elif scheme == "ftp":
            # requests has no FTP adapter
            with urllib.request.urlopen(url, timeout=timeout) as r, open(tmp, "wb") as f:
                shutil.copyfileobj(r, f, CHUNK_SIZE)
        else:
            raise ValueError(f"Unsupported URL scheme '{scheme}': {url}")
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise

    tmp.replace(dest)
    log.append(f"✓ Downloaded {url} → {dest} ({file_size_mb(dest):.2f} MB)")

    return dest, log


def find_shapefile(directory, name=None):
    """
    Locate a .shp file below directory.

    Args:
        directory: Folder to search (recursively)
        name: Preferred file name (case-insensitive); first .shp found otherwise

    Returns:
        Path to the shapefile, or None if there is none
    """
    directory = Path(directory)
    if not directory.exists():
        return None

    candidates = sorted(directory.rglob("*.shp"))
    if name is not None:
        for p in candidates:
            if p.name.lower() == name.lower():
                return p
    return candidates[0] if candidates else None


def extract_archive(archive, dest, shapefile_name=None):
    """
    Unzip the archive into dest unless the shapefile is already extracted.

    Args:
        archive: Path to zip archive
        dest: Target folder
        shapefile_name: Shapefile expected inside the archive

    Returns:
        Path to the extraction folder and log info
    """
    log = []
    archive = Path(archive)
    dest = Path(dest)

    existing = find_shapefile(dest, shapefile_name)
    if existing is not None and (shapefile_name is None or existing.name.lower() == shapefile_name.lower()):
        log.append(f"✓ Shapefile already extracted, skipping unzip: {existing.relative_to(dest)}")
        return dest, log

    if not archive.exists():
        raise FileNotFoundError(f"Archive not found: {archive}")

    with zipfile.ZipFile(archive) as zf:
        members = zf.namelist()
        if not any(m.lower().endswith(".shp") for m in members):
            raise ValueError(f"No .shp file inside {archive.name}")
        dest.mkdir(parents=True, exist_ok=True)
        zf.extractall(dest)

    log.append(f"✓ Extracted {len(members)} files from {archive.name} → {dest}")

    return dest, log


def load_shapefile(filepath, **kwargs):
    """
    Load a shapefile with CRS validation.

    Args:
        filepath: Path to .shp file
        **kwargs: Additional arguments for gpd.read_file()

    Returns:
        geopandas.GeoDataFrame
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Shapefile not found: {filepath}")

    gdf = gpd.read_file(filepath, **kwargs)

    if gdf.crs is None:
        warnings.warn(f"⚠️  CRS missing in {filepath.name}. Assuming {config.CRS_FALLBACK}")
        gdf = gdf.set_crs(config.CRS_FALLBACK)

    return gdf


def fetch_wria(url=None, raw_dir=None, overwrite=False):
    """
    Download, unzip and locate the WRIA shapefile.

    Returns:
        Path to the shapefile and log info
    """
    url = url or config.WRIA_URL
    raw_dir = Path(raw_dir) if raw_dir is not None else config.RAW_DIR

    archive, log = download_archive(url, raw_dir / config.ARCHIVE_NAME, overwrite=overwrite)
    out_dir, extract_log = extract_archive(archive, raw_dir / "wria", config.SHAPEFILE_NAME)
    log += extract_log

    shp = find_shapefile(out_dir, config.SHAPEFILE_NAME)
    if shp is None:
        raise FileNotFoundError(f"No shapefile found in {out_dir}")
    if shp.name.lower() != config.SHAPEFILE_NAME.lower():
        log.append(f"⚠️  {config.SHAPEFILE_NAME} not found; using {shp.name}")
    log.append(f"✓ Shapefile: {shp}")

    return shp, log


def load_geojson(filepath, **kwargs):
    """
    Load GeoJSON file with CRS validation.

    Args:
        filepath: Path to GeoJSON file
        **kwargs: Additional arguments for gpd.read_file()

    Returns:
        geopandas.GeoDataFrame
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"GeoJSON file not found: {filepath}")

    gdf = gpd.read_file(filepath, **kwargs)

    if gdf.crs is None:
        warnings.warn(f"⚠️  CRS missing in {filepath.name}. Assuming {config.CRS_WEB}")
        gdf = gdf.set_crs(config.CRS_WEB)

    return gdf


def load_parquet(filepath, **kwargs):
    """
    Load (Geo)Parquet file.

    Returns:
        geopandas.GeoDataFrame if a geometry column is present, else pd.DataFrame
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Parquet file not found: {filepath}")

    try:
        return gpd.read_parquet(filepath, **kwargs)
    except ValueError:
        # no geo metadata
        return pd.read_parquet(filepath, **kwargs)


def save_parquet(df, filepath, **kwargs):
    """
    Save DataFrame to Parquet.

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    # Preserve geometry for GeoDataFrames
    if isinstance(df, gpd.GeoDataFrame):
        df.to_parquet(filepath, **kwargs)
    else:
        df.to_parquet(filepath, index=False, **kwargs)

    return filepath


def save_geojson(gdf, filepath, **kwargs):
    """
    Save GeoDataFrame to GeoJSON (always EPSG:4326).

    Returns:
        Path to saved file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    # Ensure EPSG:4326 for web compatibility
    if gdf.crs != config.CRS_WEB:
        gdf = gdf.to_crs(config.CRS_WEB)

    gdf.to_file(filepath, driver="GeoJSON", **kwargs)

    return filepath


def save_csv(df, filepath, **kwargs):
    """Save DataFrame to CSV and return the path."""
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    df.to_csv(filepath, index=False, **kwargs)

    return filepath


def file_size_mb(filepath):
    """Get file size in MB."""
    return Path(filepath).stat().st_size / (1024 ** 2)
