import asyncio

import folium

from webmaplab.config import COORDINATE_DECIMALS, DEFAULT_CENTER, DEFAULT_ZOOM, ONBOARDING_DELAY_S
from webmaplab.constants import CLICK_OUTPUT_ID, DEFAULT_BASEMAP, HOVER_OUTPUT_ID, MARKER_GROUP_NAME, TRANSIENT_MARKER_POPUP
from webmaplab.exceptions import ConfigurationError
from webmaplab.layers.control import assemble_layer_control
from webmaplab.layers.sequencer import LayerFetchSequencer
from webmaplab.viz.basemaps import ScaleBar, set_basemap_layers, set_markers
from webmaplab.viz.interactions import MapInteractions, OnboardingMessage, TextOutput, format_coordinates


class MapShell:
    """
    Core class for webmaplab.
    Owns the folium map, its basemaps and initial viewport, the pointer
    handlers and the layer control built once overlays have loaded.
    """

    def __init__(
        self,
        center=DEFAULT_CENTER,
        zoom=DEFAULT_ZOOM,
        basemaps=None,
        initial_basemap=None,
        markers=None,
        click_output=None,
        hover_output=None,
        onboarding=None,
        scale_bar=None,
        decimals=COORDINATE_DECIMALS,
        show_overlays=False,
    ):
        """
        Create the map with its initial basemap, scale bar and marker layer.

        Args:
            center (tuple): Initial (lat, lng).
            zoom (int): Initial zoom level.
            basemaps (dict, optional): name -> folium.TileLayer. Defaults to set_basemap_layers().
            initial_basemap (str, optional): Basemap shown on load. Defaults to DEFAULT_BASEMAP,
                or the first basemap when that name is not in the set.
            markers (list of tuple, optional): Positions of the pre-built marker layer.
                Defaults to a single marker at the center.
            click_output, hover_output (TextOutput, optional): Coordinate readout elements.
            onboarding (OnboardingMessage, optional): Getting-started banner.
            scale_bar (ScaleBar, optional): Defaults to a 100 px metric bar at the bottom right.
            decimals (int): Digits shown in coordinate readouts.
            show_overlays (bool): Whether overlays start checked in the layer control.
        """
        self.basemaps = set_basemap_layers() if basemaps is None else dict(basemaps)
        if not self.basemaps:
            raise ConfigurationError("At least one basemap is required.")

        if initial_basemap is None:
            initial_basemap = DEFAULT_BASEMAP if DEFAULT_BASEMAP in self.basemaps else next(iter(self.basemaps))
        if initial_basemap not in self.basemaps:
            raise ConfigurationError(f"Unknown initial basemap '{initial_basemap}'.")

        self.center = tuple(center)
        self.zoom = zoom
        self.decimals = decimals
        self.show_overlays = show_overlays
        self.click_output = click_output or TextOutput(CLICK_OUTPUT_ID)
        self.hover_output = hover_output or TextOutput(HOVER_OUTPUT_ID)
        self.onboarding = onboarding or OnboardingMessage()

        self.transient_marker = None
        self.layer_selector = None
        self.sequencer = None
        self.onboarding_timer = None

        marker_positions = [self.center] if markers is None else list(markers)
        self.preparsed = [{MARKER_GROUP_NAME: set_markers(*marker_positions, show=show_overlays)}]

        self.map = folium.Map(location=list(self.center), zoom_start=zoom, tiles=None)
        self.basemaps[initial_basemap].add_to(self.map)
        (scale_bar or ScaleBar()).add_to(self.map)
        MapInteractions(
            click_output=self.click_output,
            hover_output=self.hover_output,
            onboarding=self.onboarding,
            decimals=decimals,
        ).add_to(self.map)

    def _remove_from_map(self, element):
        # folium has no public API for removing an element from a map
        self.map._children.pop(element.get_name(), None)
        element._parent = None

    def handle_click(self, lat, lng):
        """
        Hide the onboarding message, show the clicked coordinates and move
        the user marker there. Only one user marker exists at a time.

        Returns:
            folium.Marker: The new marker.
        """
        self.onboarding.hide()
        self.click_output.write(format_coordinates(lat, lng, self.decimals))

        if self.transient_marker is not None:
            self._remove_from_map(self.transient_marker)

        self.transient_marker = folium.Marker(location=[lat, lng], popup=TRANSIENT_MARKER_POPUP).add_to(self.map)
        return self.transient_marker

    def handle_mouse_move(self, lat, lng):
        """Show the pointer coordinates. Map state is left untouched."""
        self.hover_output.write(format_coordinates(lat, lng, self.decimals))

    def start_onboarding_timer(self, delay=ONBOARDING_DELAY_S):
        """
        Hide the onboarding message after a delay. Must be called from a running event loop.

        Returns:
            asyncio.TimerHandle: The scheduled one-shot action.
        """
        loop = asyncio.get_running_loop()
        self.onboarding_timer = loop.call_later(delay, self.onboarding.hide)
        return self.onboarding_timer

    def _preparsed_names(self):
        entries = self.sequencer.preparsed if self.sequencer is not None else self.preparsed
        return {name for entry in entries for name in entry}

    def attach_layer_control(self, layer_group_mapping):
        """
        Build the layer control from the loaded overlays and attach it to the map.

        Loaded overlays start checked or unchecked according to show_overlays.
        Pre-parsed layers keep the visibility they were built with. Every layer
        is given its mapping name and overlay flag as it joins the control.

        Args:
            layer_group_mapping (dict): name -> overlay layer.

        Returns:
            LayerSelector: The attached control.
        """
        if self.layer_selector is not None:
            raise ConfigurationError("Layer control is already attached to this map.")

        preparsed_names = self._preparsed_names()
        for name, layer in layer_group_mapping.items():
            if name not in preparsed_names:
                layer.show = self.show_overlays

        selector = assemble_layer_control(layer_group_mapping, self.basemaps)
        self.layer_selector = selector.add_to(self.map)
        return self.layer_selector

    async def run(self, descriptors, preparsed=None, client=None, base_url=""):
        """
        Start the onboarding timer, load every descriptor in order and attach
        the layer control once all of them are loaded.

        Args:
            descriptors (list[LayerDescriptor]): Overlay sources.
            preparsed (list[dict], optional): Extra entries added after the marker layer.
            client (httpx.AsyncClient, optional): Client reused for every retrieval.
            base_url (str): Base URL for relative sources when no client is given.

        Returns:
            dict: The name -> layer mapping shown in the control.

        Raises:
            RetrievalError, ParseError: When a source fails. The control is then never attached.
        """
        self.start_onboarding_timer()
        self.sequencer = LayerFetchSequencer(
            preparsed=self.preparsed + list(preparsed or []),
            client=client,
            base_url=base_url,
        )
        return await self.sequencer.run(descriptors, on_complete=self.attach_layer_control)
