"""
Layer acquisition and composition: parse feature collections, load them
in order and assemble the layer control.
"""

from .parser import parse_geojson, popup_label, features_to_geodataframe
from .control import merge_layer_entries, assemble_layer_control, LayerSelector
from .sequencer import LayerFetchSequencer

__all__ = [
    'parse_geojson',
    'popup_label',
    'features_to_geodataframe',
    'merge_layer_entries',
    'assemble_layer_control',
    'LayerSelector',
    'LayerFetchSequencer',
]
