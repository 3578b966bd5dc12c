"""
Stats module: summary statistics over WRIA areas (maximum, quantiles, classes).
"""

import numpy as np
import pandas as pd
from . import config


def max_area(gdf, col='area_km2'):
    """
    Return the largest WRIA.

    Returns:
        dict with 'wria_id', 'wria_name' (if present) and the area value
    """
    if len(gdf) == 0 or gdf[col].notna().sum() == 0:
        raise ValueError(f"No {col} values to take the maximum of")

    row = gdf.loc[gdf[col].idxmax()]
    result = {'wria_id': row['wria_id'] if 'wria_id' in gdf.columns else row.name}
    if 'wria_name' in gdf.columns:
        result['wria_name'] = row['wria_name']
    result[col] = float(row[col])
    return result


def quantile_thresholds(series, qs=None):
    """Return {quantile: value} for the given quantiles."""
    qs = config.AREA_QUANTILES if qs is None else qs
    values = series.dropna().quantile(qs)
    return {float(q): float(v) for q, v in values.items()}


def classify_by_quantile(series, qs=None):
    """
    Assign quantile classes Q1..Qn.

    qs are the inner cut points (e.g. [0.25, 0.5, 0.75] -> 4 classes).
    Duplicate edges collapse into fewer classes.

    Returns:
        Categorical series of labels and the bin edges used
    """
    qs = config.AREA_QUANTILES if qs is None else qs
    edges = np.unique(series.dropna().quantile([0.0] + list(qs) + [1.0]).values)

    if len(edges) < 2:
        # all values equal
        labels = ['Q1']
        classes = pd.Series(pd.Categorical(['Q1'] * len(series), categories=labels), index=series.index)
        classes[series.isna()] = np.nan
        return classes, edges

    labels = [f"Q{i + 1}" for i in range(len(edges) - 1)]
    classes = pd.cut(series, bins=edges, labels=labels, include_lowest=True)
    return classes, edges


def subset_above_quantile(gdf, q=None, col='area_km2'):
    """Rows whose col is at or above the q-th quantile."""
    q = config.LARGE_WRIA_QUANTILE if q is None else q
    threshold = gdf[col].quantile(q)
    return gdf[gdf[col] >= threshold].copy()


def summarize(gdf, col='area_km2', qs=None):
    """
    Summary table of the area column.

    Returns:
        pd.DataFrame with columns ['statistic', 'value']
    """
    s = gdf[col].dropna()
    rows = [
        ('count', float(len(s))),
        ('total', float(s.sum())),
        ('mean', float(s.mean())),
        ('median', float(s.median())),
        ('min', float(s.min())),
        ('max', float(s.max())),
    ]
    for q, v in quantile_thresholds(s, qs).items():
        rows.append((f"q{int(round(q * 100))}", v))

    return pd.DataFrame(rows, columns=['statistic', 'value'])
