# config.py
# Defaults for CRS, initial viewport, scale bar, readouts and popups

DEFAULT_CRS = "EPSG:4326"

DEFAULT_CENTER = (53.533727, -113.506616)  # Edmonton, lat/lng
DEFAULT_ZOOM = 11

SCALE_BAR_MAX_WIDTH = 100
SCALE_BAR_POSITION = "bottomright"

COORDINATE_DECIMALS = 2
ONBOARDING_DELAY_S = 10.0

UNNAMED_LABEL = "Unnamed"
POPUP_FIELD = "popup_label"
