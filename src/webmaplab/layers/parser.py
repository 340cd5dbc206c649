import json

import folium
import geopandas as gpd
from shapely.errors import GeometryTypeError, ShapelyError
from shapely.geometry import shape

from webmaplab.config import DEFAULT_CRS, POPUP_FIELD, UNNAMED_LABEL
from webmaplab.exceptions import ParseError

RESERVED_COLUMNS = ("geometry", POPUP_FIELD)


def _features_from_document(document):
    """
    Check the feature collection envelope and return its features.

    Features with a null or missing "properties" member get an empty mapping.
    """
    if not isinstance(document, dict) or document.get("type") != "FeatureCollection":
        raise ParseError("Document is not a GeoJSON FeatureCollection.")

    features = document.get("features")
    if not isinstance(features, list):
        raise ParseError("FeatureCollection has no 'features' list.")

    normalized = []
    for i, feature in enumerate(features):
        if not isinstance(feature, dict) or "geometry" not in feature:
            raise ParseError(f"Feature {i} is not a GeoJSON Feature.")
        properties = feature.get("properties") or {}
        if not isinstance(properties, dict):
            raise ParseError(f"Feature {i} has non-object properties.")
        normalized.append({**feature, "properties": properties})
    return normalized


def _feature_geometry(feature, index):
    if feature["geometry"] is None:
        return None
    try:
        return shape(feature["geometry"])
    except (GeometryTypeError, ShapelyError, TypeError, ValueError, KeyError, AttributeError) as e:
        raise ParseError(f"Feature {index} has an invalid geometry: {e}") from e


def popup_label(properties, label_attribute):
    """
    Popup text for one feature: its label attribute, or the placeholder when it is missing or null.

    Args:
        properties (dict): Feature properties.
        label_attribute (str): Property holding the label.

    Returns:
        str: The label text.
    """
    value = properties.get(label_attribute)
    if value is None:
        return UNNAMED_LABEL
    if isinstance(value, str):
        return value
    # Numbers, booleans and nested values read as they do in the document
    return json.dumps(value)


def features_to_geodataframe(document, label_attribute):
    """
    Load a feature collection into a GeoDataFrame with a popup label column.

    Args:
        document (dict): GeoJSON FeatureCollection.
        label_attribute (str): Property used for popup text.

    Returns:
        geopandas.GeoDataFrame: One row per feature in EPSG:4326, with POPUP_FIELD set.

    Raises:
        ParseError: If the document or one of its geometries is invalid.
    """
    features = _features_from_document(document)

    if not features:
        return gpd.GeoDataFrame({POPUP_FIELD: [], 'geometry': []}, crs=DEFAULT_CRS)

    geometries = [_feature_geometry(feature, i) for i, feature in enumerate(features)]

    # Properties sharing a name with the frame's own columns are left out;
    # popup labels come from the raw properties, so they are still usable
    rows = [
        {key: value for key, value in feature["properties"].items() if key not in RESERVED_COLUMNS}
        for feature in features
    ]
    gdf = gpd.GeoDataFrame(rows, index=range(len(features)), geometry=geometries, crs=DEFAULT_CRS)

    gdf[POPUP_FIELD] = [popup_label(feature["properties"], label_attribute) for feature in features]
    return gdf


def parse_geojson(document, label_attribute, style=None, name=None):
    """
    Convert a GeoJSON feature collection into a renderable map layer.

    Every feature gets a popup whose text is its label attribute, or
    "Unnamed" when the attribute is missing or null. The style is applied
    uniformly to all features. No I/O happens here, so parsing the same
    document twice produces equivalent layers.

    Args:
        document (dict): Decoded GeoJSON FeatureCollection.
        label_attribute (str): Property name used for popup text.
        style (dict, optional): Leaflet path options such as {'color': 'green'}.
        name (str, optional): Layer name shown in the layer control.

    Returns:
        folium.GeoJson: The layer, with one popup per feature.

    Raises:
        ParseError: If the document is not a valid feature collection.
    """
    gdf = features_to_geodataframe(document, label_attribute)
    style = dict(style or {})

    # An empty collection has nothing to style or bind a popup to
    if gdf.empty:
        return folium.GeoJson(gdf, name=name)

    return folium.GeoJson(
        gdf,
        name=name,
        style_function=lambda feature: dict(style),
        popup=folium.GeoJsonPopup(fields=[POPUP_FIELD], labels=False),
    )
