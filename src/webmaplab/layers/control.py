import folium

from webmaplab.exceptions import ConfigurationError


def merge_layer_entries(entries):
    """
    Flatten a list of {name: layer} entries into one ordered mapping.

    Args:
        entries (iterable of dict): Pre-parsed and realized layer entries.

    Returns:
        dict: name -> layer in first-seen order.

    Raises:
        ConfigurationError: If a name appears twice.
    """
    mapping = {}
    for entry in entries:
        for name, layer in entry.items():
            if name in mapping:
                raise ConfigurationError(f"Duplicate layer name '{name}'.")
            mapping[name] = layer
    return mapping


def _on_map(m, element):
    return element.get_name() in m._children


class LayerSelector:
    """
    The user-facing layer control: basemaps as mutually exclusive radio
    buttons, overlays as independent checkboxes.

    Leaflet's layer control lists the layers that share its map, so
    attaching adds every layer to the map before the control itself.
    """

    def __init__(self, base_layers, overlays, collapsed=True, position="topright"):
        self.base_layers = dict(base_layers)
        self.overlays = dict(overlays)
        self.control = folium.LayerControl(position=position, collapsed=collapsed)
        self.map = None

    def add_to(self, m):
        """
        Attach the control and its layers to a folium map. Only one attachment is allowed.

        Each layer takes its mapping name and the overlay flag for its kind
        (radio button or checkbox); nothing else about it changes.

        Returns:
            LayerSelector: self, for chaining.
        """
        if self.map is not None:
            raise ConfigurationError("Layer control is already attached to a map.")

        for name, tile_layer in self.base_layers.items():
            tile_layer.layer_name = name
            tile_layer.overlay = False
            if not _on_map(m, tile_layer):
                tile_layer.add_to(m)

        for name, layer in self.overlays.items():
            layer.layer_name = name
            layer.overlay = True
            layer.control = True
            if not _on_map(m, layer):
                layer.add_to(m)

        self.control.add_to(m)
        self.map = m
        return self


def assemble_layer_control(layer_group_mapping, basemap_mapping, collapsed=True, position="topright"):
    """
    Build the layer control from fetched/pre-parsed overlays and the basemap set.

    Args:
        layer_group_mapping (dict): name -> overlay layer, in display order.
        basemap_mapping (dict): name -> folium.TileLayer.
        collapsed (bool): Whether the control starts collapsed.
        position (str): Leaflet control position.

    Returns:
        LayerSelector: Not yet attached; call add_to(map).

    Raises:
        ConfigurationError: If an overlay shares a name with a basemap.
    """
    clashes = set(layer_group_mapping) & set(basemap_mapping)
    if clashes:
        raise ConfigurationError(f"Overlay names clash with basemaps: {', '.join(sorted(clashes))}.")

    return LayerSelector(basemap_mapping, layer_group_mapping, collapsed=collapsed, position=position)
