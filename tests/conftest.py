import httpx
import pytest

from webmaplab.types import LayerDescriptor

BASE_URL = "https://data.example.org"


def polygon_feature(label_key, label_value, x0=-113.5, y0=53.5):
    return {
        "type": "Feature",
        "properties": {label_key: label_value},
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[x0, y0], [x0 + 0.01, y0], [x0 + 0.01, y0 + 0.01], [x0, y0 + 0.01], [x0, y0]]],
        },
    }


def collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def mock_client(routes, calls=None, handler=None):
    """
    AsyncClient answering from a path -> document mapping.
    Unknown paths get a 404. Requested paths are appended to `calls`.
    """
    if calls is None:
        calls = []

    def default_handler(request):
        calls.append(request.url.path)
        if request.url.path not in routes:
            return httpx.Response(404, request=request)
        return httpx.Response(200, json=routes[request.url.path], request=request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler or default_handler), base_url=BASE_URL)


@pytest.fixture
def parks_doc():
    return collection(
        polygon_feature("offname", "Hawrelak Park"),
        polygon_feature("offname", None, x0=-113.45),
    )


@pytest.fixture
def roads_doc():
    return collection(
        {
            "type": "Feature",
            "properties": {"name_ab": "Jasper Avenue"},
            "geometry": {"type": "LineString", "coordinates": [[-113.53, 53.541], [-113.485, 53.543]]},
        }
    )


@pytest.fixture
def descriptors():
    return [
        LayerDescriptor(name="Edmonton Parks", label_attribute="offname", source="/parks.geojson", style={"color": "green"}),
        LayerDescriptor(name="Edmonton Roads", label_attribute="name_ab", source="/roads.geojson", style={"color": "purple"}),
    ]


@pytest.fixture
def routes(parks_doc, roads_doc):
    return {"/parks.geojson": parks_doc, "/roads.geojson": roads_doc}
