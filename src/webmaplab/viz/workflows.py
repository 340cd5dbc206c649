"""
Workflow functions for building a complete map page.
"""

import asyncio
import dataclasses
import warnings
from pathlib import Path

from webmaplab.config import DEFAULT_CENTER, DEFAULT_ZOOM
from webmaplab.constants import DEFAULT_LAYERS
from webmaplab.exceptions import ParseError, RetrievalError
from webmaplab.io.geojson import is_remote_source


def resolve_sources(descriptors, data_root):
    """
    Prefix local, relative sources with a data directory.
    
    Parameters
    
    descriptors : list of LayerDescriptor
        Layer sources as configured
    data_root : str or pathlib.Path
        Directory that relative paths are resolved against
        
    Returns
    
    list of LayerDescriptor
        New descriptors; URLs and absolute paths are left unchanged
    """
    resolved = []
    for descriptor in descriptors:
        source = descriptor.source
        if not is_remote_source(source) and not Path(source).is_absolute():
            descriptor = dataclasses.replace(descriptor, source=str(Path(data_root) / source))
        resolved.append(descriptor)
    return resolved


def render_map(output_path, descriptors=None, data_root=None, base_url="", center=DEFAULT_CENTER,
               zoom=DEFAULT_ZOOM, markers=None, client=None):
    """
    Build the map, load its overlays and save it as a standalone HTML page.
    
    A failing source leaves the page without overlays: the basemap and
    pointer interactions still work, and a warning is emitted.
    Uses asyncio.run, so it cannot be called from a running event loop.
    
    Parameters
    
    output_path : str or pathlib.Path
        Where to write the HTML page
    descriptors : list of LayerDescriptor, optional
        Overlay sources. Defaults to DEFAULT_LAYERS
    data_root : str or pathlib.Path, optional
        Directory for relative local sources
    base_url : str, optional
        Base URL for relative remote sources
    center : tuple, optional
        Initial (lat, lng)
    zoom : int, optional
        Initial zoom level
    markers : list of tuple, optional
        Positions for the pre-built marker layer
    client : httpx.AsyncClient, optional
        Client reused for every retrieval
        
    Returns
    
    MapShell
        The shell whose map was saved
    """
    if descriptors is None:
        descriptors = DEFAULT_LAYERS
    if data_root is not None:
        descriptors = resolve_sources(descriptors, data_root)

    from webmaplab.core import MapShell

    shell = MapShell(center=center, zoom=zoom, markers=markers)

    print(f"Loading {len(descriptors)} layer source(s)...")
    try:
        mapping = asyncio.run(shell.run(descriptors, client=client, base_url=base_url))
        print(f"  Layers in control: {', '.join(mapping)}")
    except (RetrievalError, ParseError) as e:
        warnings.warn(f"Overlays not loaded, map saved without layer control: {e}")

    shell.map.save(str(output_path))
    print(f"Interactive map saved: {output_path}")
    return shell
