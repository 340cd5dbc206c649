"""
Map page elements for webmaplab: basemaps, markers, pointer interactions
and the end-to-end workflow.
"""

from .basemaps import set_basemap_layers, set_markers, ScaleBar
from .interactions import format_coordinates, TextOutput, OnboardingMessage, MapInteractions
from .workflows import resolve_sources, render_map

__all__ = [
    'set_basemap_layers',
    'set_markers',
    'ScaleBar',
    'format_coordinates',
    'TextOutput',
    'OnboardingMessage',
    'MapInteractions',
    'resolve_sources',
    'render_map',
]
