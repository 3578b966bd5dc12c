"""
Plotting module: static WRIA maps (matplotlib / geopandas) and an optional folium web map.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
from matplotlib.lines import Line2D
import seaborn as sns
import folium

from . import config
from .stats import classify_by_quantile, max_area
from .spatial import representative_points


def _to_web(gdf):
    if gdf.crs is not None and gdf.crs != config.CRS_WEB:
        return gdf.to_crs(config.CRS_WEB)
    return gdf


def _new_map(title):
    fig, ax = plt.subplots(figsize=config.FIGURE_SIZE)
    ax.set_title(title)
    ax.set_xlabel('Longitude')
    ax.set_ylabel('Latitude')
    return fig, ax


def save_figure(fig, path, dpi=None):
    """Save figure to path (parents created) and close it."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi or config.FIGURE_DPI, bbox_inches='tight')
    plt.close(fig)
    return path


def plot_boundaries(gdf, labels=False, title='Washington WRIA boundaries'):
    """Outline map of all WRIAs, optionally labelled with wria_id."""
    gdf = _to_web(gdf)
    fig, ax = _new_map(title)
    gdf.plot(ax=ax, facecolor='#f0f0f0', edgecolor='0.3', linewidth=0.6)

    if labels and 'wria_id' in gdf.columns:
        for _, row in representative_points(gdf).iterrows():
            ax.annotate(str(row['wria_id']), xy=(row.geometry.x, row.geometry.y),
                        ha='center', va='center', fontsize=7)

    return fig, ax


def plot_area_choropleth(gdf, col='area_km2', cmap='Blues', title='WRIA area (km²)'):
    """Continuous choropleth of polygon area with a colourbar."""
    gdf = _to_web(gdf)
    fig, ax = _new_map(title)
    gdf.plot(ax=ax, column=col, cmap=cmap, edgecolor='0.4', linewidth=0.4,
             legend=True, legend_kwds={'label': col, 'shrink': 0.6})
    return fig, ax


def plot_quantile_classes(gdf, col='area_km2', qs=None, title='WRIA area quantile classes'):
    """
    Classed choropleth (Q1..Qn) with a legend of interval edges and counts.
    """
    gdf = _to_web(gdf).copy()
    gdf['area_class'], edges = classify_by_quantile(gdf[col], qs)
    labels = list(gdf['area_class'].cat.categories)
    colors = config.CLASS_COLORS
    class_to_color = {cls: colors[min(i, len(colors) - 1)] for i, cls in enumerate(labels)}

    fig, ax = _new_map(title)
    patches = []
    for i, cls in enumerate(labels):
        subset = gdf[gdf['area_class'] == cls]
        if len(subset) > 0:
            subset.plot(ax=ax, color=class_to_color[cls], edgecolor='0.4', linewidth=0.4)
        if len(edges) > i + 1:
            lo, hi = edges[i], edges[i + 1]
            label = f"{cls}: {lo:,.0f}–{hi:,.0f} (n={len(subset)})"
        else:
            label = f"{cls} (n={len(subset)})"
        patches.append(mpatches.Patch(facecolor=class_to_color[cls], edgecolor='0.4', label=label))

    ax.legend(handles=patches, title=f'{col} quantiles', loc='lower left')
    return fig, ax


def plot_largest(gdf, col='area_km2', title=None):
    """All WRIAs in grey with the largest one highlighted."""
    gdf = _to_web(gdf)
    largest = max_area(gdf, col)
    name = largest.get('wria_name', largest['wria_id'])
    title = title or f"Largest WRIA: {name} ({largest[col]:,.0f} km²)"

    fig, ax = _new_map(title)
    gdf.plot(ax=ax, facecolor='#f0f0f0', edgecolor='0.5', linewidth=0.4)
    gdf[gdf['wria_id'] == largest['wria_id']].plot(ax=ax, color=config.HIGHLIGHT_COLOR, edgecolor='0.2')
    return fig, ax


def plot_centroids(gdf, gdf_centroids, title='WRIA centroids'):
    """Boundaries with centroid points on top."""
    gdf = _to_web(gdf)
    gdf_centroids = _to_web(gdf_centroids)

    fig, ax = _new_map(title)
    gdf.plot(ax=ax, facecolor='none', edgecolor='0.5', linewidth=0.5)
    gdf_centroids.plot(ax=ax, color=config.HIGHLIGHT_COLOR, markersize=12)

    handles = [
        Line2D([0], [0], color='0.5', linewidth=0.8, label='WRIA boundary'),
        Line2D([0], [0], marker='o', color='w', markerfacecolor=config.HIGHLIGHT_COLOR,
               markersize=6, label='Centroid'),
    ]
    ax.legend(handles=handles, loc='lower left')
    return fig, ax


def plot_area_distribution(gdf, col='area_km2', qs=None, title='Distribution of WRIA area'):
    """Histogram of areas with vertical lines at the quantile thresholds."""
    qs = config.AREA_QUANTILES if qs is None else qs
    fig, ax = plt.subplots(figsize=(8, 5))
    sns.histplot(gdf[col].dropna(), bins=20, ax=ax, color='#6baed6')

    values = gdf[col].dropna().quantile(qs)
    for q, v in values.items():
        ax.axvline(v, color='0.2', linestyle='--', linewidth=0.8)
        ax.annotate(f"q{int(round(q * 100))}", xy=(v, ax.get_ylim()[1] * 0.95),
                    ha='left', fontsize=8)

    ax.set_title(title)
    ax.set_xlabel(col)
    ax.set_ylabel('Number of WRIAs')
    return fig, ax


def make_webmap(gdf, path=None, col='area_km2'):
    """
    Interactive folium map of WRIA boundaries with name/area tooltips.

    Returns:
        folium.Map (saved as HTML when path is given)
    """
    gdf = _to_web(gdf)
    minx, miny, maxx, maxy = gdf.total_bounds
    m = folium.Map(location=[(miny + maxy) / 2, (minx + maxx) / 2], zoom_start=7,
                   tiles='OpenStreetMap')

    fields = [c for c in ['wria_id', 'wria_name', col] if c in gdf.columns]
    folium.GeoJson(
        gdf[fields + [gdf.geometry.name]],
        name='WRIA',
        style_function=lambda _: {'fillColor': '#6baed6', 'color': '#2171b5',
                                  'weight': 1, 'fillOpacity': 0.4},
        tooltip=folium.GeoJsonTooltip(fields=fields),
    ).add_to(m)
    m.fit_bounds([[miny, minx], [maxy, maxx]])

    if path is not None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        m.save(str(path))

    return m
