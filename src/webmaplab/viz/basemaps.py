"""
Basemap tiles, marker groups and the scale bar.
"""

import folium
from branca.element import MacroElement, Template

from webmaplab.config import SCALE_BAR_MAX_WIDTH, SCALE_BAR_POSITION
from webmaplab.constants import BASEMAP_PROVIDERS, MARKER_GROUP_NAME, MARKER_POPUP


def set_basemap_layers(providers=None):
    """
    Create one tile layer per basemap provider.
    
    Parameters
    
    providers : dict, optional
        name -> {'tiles': url template, 'attr': attribution, 'max_zoom': int}.
        Defaults to BASEMAP_PROVIDERS.
        
    Returns
    
    dict
        name -> folium.TileLayer, in provider order
    """
    providers = BASEMAP_PROVIDERS if providers is None else providers
    return {
        name: folium.TileLayer(
            tiles=provider["tiles"],
            attr=provider["attr"],
            name=name,
            max_zoom=provider.get("max_zoom", 18),
            overlay=False,
        )
        for name, provider in providers.items()
    }


def set_markers(*lat_lngs, popup=MARKER_POPUP, name=MARKER_GROUP_NAME, show=False):
    """
    Group point markers into one toggleable layer.
    
    Parameters
    
    *lat_lngs : tuple of (float, float)
        Marker positions as (lat, lng)
    popup : str, optional
        Popup text bound to every marker
    name : str, optional
        Layer name shown in the layer control
    show : bool, optional
        Whether the layer starts checked in the layer control
        
    Returns
    
    folium.FeatureGroup
        The marker group, not yet added to a map
    """
    group = folium.FeatureGroup(name=name, overlay=True, control=True, show=show)
    for lat, lng in lat_lngs:
        folium.Marker(location=[lat, lng], popup=popup).add_to(group)
    return group


class ScaleBar(MacroElement):
    """Leaflet scale control with a configurable width and position."""

    _template = Template("""
        {% macro script(this, kwargs) %}
            L.control.scale({{ this.options|tojson }}).addTo({{ this._parent.get_name() }});
        {% endmacro %}
    """)

    def __init__(self, max_width=SCALE_BAR_MAX_WIDTH, position=SCALE_BAR_POSITION, imperial=False):
        super().__init__()
        self._name = "ScaleBar"
        self.options = {
            "maxWidth": max_width,
            "imperial": imperial,
            "metric": True,
            "position": position,
        }
