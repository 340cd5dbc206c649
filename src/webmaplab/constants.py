# constants.py

from webmaplab.types import LayerDescriptor

BASEMAP_PROVIDERS = {
    "Stadia_AlidadeSmooth": {
        "tiles": "https://tiles.stadiamaps.com/tiles/alidade_smooth/{z}/{x}/{y}{r}.png",
        "max_zoom": 20,
        "attr": (
            '&copy; <a href="https://stadiamaps.com/">Stadia Maps</a>, '
            '&copy; <a href="https://openmaptiles.org/">OpenMapTiles</a> '
            '&copy; <a href="http://openstreetmap.org">OpenStreetMap</a> contributors'
        ),
    },
    "osm": {
        "tiles": "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png",
        "max_zoom": 19,
        "attr": '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors',
    },
}
DEFAULT_BASEMAP = "Stadia_AlidadeSmooth"

# Sources are relative to the data root handed to the sequencer
DEFAULT_LAYERS = [
    LayerDescriptor(
        name="Edmonton Parks",
        label_attribute="offname",
        source="json/EdmontonParks.geojson",
        style={"color": "green"},
    ),
    LayerDescriptor(
        name="Edmonton Roads",
        label_attribute="name_ab",
        source="json/EdmontonRoads.geojson",
        style={"color": "purple"},
    ),
]

MARKER_GROUP_NAME = "Enemies"
MARKER_POPUP = "An enemy lives here."
TRANSIENT_MARKER_POPUP = "Possible Enemy Location"

CLICK_OUTPUT_ID = "click"
HOVER_OUTPUT_ID = "mouse-position"
ONBOARDING_ID = "get-started"
