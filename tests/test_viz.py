"""
Tests for the map page elements (viz)

Tests cover:
1. Basemap and marker layers
2. Interaction elements
3. The render_map workflow, including the silent failure path
"""

import json
from pathlib import Path

import folium
import pytest

from webmaplab.types import LayerDescriptor
from webmaplab.viz import render_map, resolve_sources, set_basemap_layers, set_markers
from webmaplab.viz.interactions import OnboardingMessage, TextOutput


# Test 1: basemaps.py

def test_set_basemap_layers_defaults():
    basemaps = set_basemap_layers()

    assert list(basemaps) == ["Stadia_AlidadeSmooth", "osm"]
    assert all(isinstance(t, folium.TileLayer) for t in basemaps.values())
    assert basemaps["osm"].layer_name == "osm"
    assert basemaps["osm"].overlay is False


def test_set_markers_groups_points():
    group = set_markers((53.5, -113.5), (53.6, -113.6), popup="Here")

    markers = [c for c in group._children.values() if isinstance(c, folium.Marker)]
    assert group.layer_name == "Enemies"
    assert [m.location for m in markers] == [[53.5, -113.5], [53.6, -113.6]]


# Test 2: interactions.py

def test_text_output_and_onboarding():
    out = TextOutput("click")
    out.write("53.53, -113.51")
    assert out.text == "53.53, -113.51"

    banner = OnboardingMessage()
    assert banner.element_id == "get-started"
    banner.hide()
    banner.hide()
    assert banner.hidden is True


# Test 3: workflows.py

def test_resolve_sources(tmp_path):
    descriptors = [
        LayerDescriptor("Parks", "offname", "json/parks.geojson"),
        LayerDescriptor("Remote", "name", "https://example.org/roads.geojson"),
        LayerDescriptor("Absolute", "name", str(tmp_path / "abs.geojson")),
    ]

    resolved = resolve_sources(descriptors, tmp_path)

    assert resolved[0].source == str(tmp_path / "json" / "parks.geojson")
    assert resolved[1].source == "https://example.org/roads.geojson"
    assert resolved[2].source == str(tmp_path / "abs.geojson")
    # Originals are untouched
    assert descriptors[0].source == "json/parks.geojson"


@pytest.fixture
def data_root(tmp_path, parks_doc, roads_doc):
    (tmp_path / "json").mkdir()
    (tmp_path / "json" / "parks.geojson").write_text(json.dumps(parks_doc))
    (tmp_path / "json" / "roads.geojson").write_text(json.dumps(roads_doc))
    return tmp_path


@pytest.fixture
def local_descriptors():
    return [
        LayerDescriptor("Edmonton Parks", "offname", "json/parks.geojson", {"color": "green"}),
        LayerDescriptor("Edmonton Roads", "name_ab", "json/roads.geojson", {"color": "purple"}),
    ]


def test_render_map_writes_page(data_root, local_descriptors, capsys):
    out = data_root / "map.html"

    shell = render_map(out, descriptors=local_descriptors, data_root=data_root)

    assert out.exists()
    html = out.read_text()
    assert "Edmonton Parks" in html
    assert "Hawrelak Park" in html
    assert list(shell.layer_selector.overlays) == ["Enemies", "Edmonton Parks", "Edmonton Roads"]
    assert "Interactive map saved" in capsys.readouterr().out


def test_render_map_without_overlays_on_failure(data_root, local_descriptors):
    """A missing source still produces a usable page, just without overlays."""
    descriptors = [local_descriptors[0], LayerDescriptor("Broken", "name", "json/missing.geojson")]
    out = data_root / "map.html"

    with pytest.warns(UserWarning, match="Overlays not loaded"):
        shell = render_map(out, descriptors=descriptors, data_root=data_root)

    assert out.exists()
    assert shell.layer_selector is None
    assert "L.control.layers" not in out.read_text()


def test_render_map_parse_failure(data_root):
    (data_root / "json" / "bad.geojson").write_text(json.dumps({"type": "Feature"}))
    descriptors = [LayerDescriptor("Bad", "name", "json/bad.geojson")]

    with pytest.warns(UserWarning):
        shell = render_map(data_root / "map.html", descriptors=descriptors, data_root=data_root)

    assert shell.layer_selector is None


def test_render_map_with_no_descriptors(tmp_path):
    shell = render_map(tmp_path / "map.html", descriptors=[], markers=[(53.5, -113.5)])

    assert list(shell.layer_selector.overlays) == ["Enemies"]


def test_example_data_is_valid():
    from webmaplab.io.descriptors import load_descriptors
    from webmaplab.layers.parser import parse_geojson

    examples = Path(__file__).parent.parent / "examples"
    for descriptor in load_descriptors(examples / "layers.json"):
        document = json.loads((examples / descriptor.source).read_text())
        layer = parse_geojson(document, descriptor.label_attribute, descriptor.style)
        assert "Unnamed" in [f["properties"]["popup_label"] for f in layer.data["features"]]


def test_render_map_non_utf8_source(data_root):
    (data_root / "json" / "latin1.geojson").write_bytes(b"\xff\xfe not utf-8")
    descriptors = [LayerDescriptor("Latin", "name", "json/latin1.geojson")]
    out = data_root / "map.html"

    with pytest.warns(UserWarning, match="Overlays not loaded"):
        shell = render_map(out, descriptors=descriptors, data_root=data_root)

    assert out.exists()
    assert shell.layer_selector is None


def test_set_markers_builds_overlay_ready_group():
    group = set_markers((53.5, -113.5))

    assert group.overlay is True
    assert group.control is True
    assert group.show is False
    assert set_markers((53.5, -113.5), show=True).show is True
