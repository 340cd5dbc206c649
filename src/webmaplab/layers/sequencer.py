"""
Sequential retrieval of layer sources.

Sources are loaded strictly one after another so the order of layers in
the control never depends on network latency. Total load time is the sum
of the per-source latencies.
"""

import warnings

import httpx

from webmaplab.exceptions import ConfigurationError
from webmaplab.io.geojson import fetch_document
from webmaplab.layers.control import merge_layer_entries
from webmaplab.layers.parser import parse_geojson
from webmaplab.types import Pending, Realized


class LayerFetchSequencer:
    """
    Loads layer descriptors one at a time and hands the finished
    name -> layer mapping to a completion callback.

    Retrieval and parse failures are not caught: the sequence stops at the
    failing step and the callback is never invoked.
    """

    def __init__(self, preparsed=None, client=None, base_url="", parser=parse_geojson):
        """
        Args:
            preparsed (list[dict], optional): Entries built outside the pipeline,
                e.g. [{'Enemies': marker_group}]. They come first in the mapping.
            client (httpx.AsyncClient, optional): Client reused for every retrieval.
                When omitted, run() opens one and closes it when done.
            base_url (str): Base URL for relative sources when run() opens its own client.
            parser (callable): Called as parser(document, label_attribute, style, name=...).
        """
        self.preparsed = list(preparsed or [])
        self.client = client
        self.base_url = base_url
        self.parser = parser
        self.entries = []
        self.completed = False

    def _check_names(self, descriptors):
        seen = set(merge_layer_entries(self.preparsed))
        for descriptor in descriptors:
            if descriptor.name in seen:
                raise ConfigurationError(f"Layer name '{descriptor.name}' is used more than once.")
            seen.add(descriptor.name)

    def _build_mapping(self):
        realized = [entry.as_entry() for entry in self.entries]
        return merge_layer_entries(self.preparsed + realized)

    async def _realize(self, client, index):
        descriptor = self.entries[index].descriptor
        document = await fetch_document(client, descriptor.source)
        layer = self.parser(document, descriptor.label_attribute, descriptor.style, name=descriptor.name)

        if isinstance(document, dict) and not document.get("features"):
            warnings.warn(f"Layer '{descriptor.name}' has no features ({descriptor.source}).")

        self.entries[index] = Realized(descriptor.name, layer)

    async def _run_with(self, client, on_complete):
        for i in range(len(self.entries)):
            await self._realize(client, i)

        mapping = self._build_mapping()
        self.completed = True
        if on_complete is not None:
            on_complete(mapping)
        return mapping

    async def run(self, descriptors, on_complete=None):
        """
        Retrieve and parse every descriptor in order.

        Args:
            descriptors (list[LayerDescriptor]): Sources to load. The list itself
                is not modified.
            on_complete (callable, optional): Called once with the final mapping.

        Returns:
            dict: name -> layer, pre-parsed entries first, then descriptors in input order.

        Raises:
            ConfigurationError: If layer names collide. Raised before any retrieval.
            RetrievalError: If a source cannot be retrieved.
            ParseError: If a source is not a valid feature collection.
        """
        if self.completed:
            raise ConfigurationError("This sequence has already completed.")

        self._check_names(descriptors)
        self.entries = [Pending(descriptor) for descriptor in descriptors]

        if self.client is not None or not self.entries:
            return await self._run_with(self.client, on_complete)

        # No timeout: a stalled source stalls the sequence
        async with httpx.AsyncClient(base_url=self.base_url, timeout=None) as client:
            return await self._run_with(client, on_complete)
