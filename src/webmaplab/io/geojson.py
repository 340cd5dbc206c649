"""
Retrieval of GeoJSON documents for map layers.

Remote sources go through a shared httpx.AsyncClient so a whole load
sequence reuses one connection pool. Plain paths are read from disk when
the client has no base URL.
"""

import json
from pathlib import Path
from urllib.parse import urlsplit

import httpx

from webmaplab.exceptions import ParseError, RetrievalError


def is_remote_source(source, client=None):
    """
    Decide whether a source location must be requested over HTTP.

    Args:
        source (str): URL or path of the source.
        client (httpx.AsyncClient, optional): Client the request would go through.
            Relative locations are remote when the client has a base URL.

    Returns:
        bool: True for http(s) URLs and for relative locations under a base URL.
    """
    if urlsplit(source).scheme in ("http", "https"):
        return True
    return client is not None and bool(client.base_url.host)


def decode_document(body, source="<memory>"):
    """
    Decode a response body as JSON.

    Raises:
        ParseError: If the body is not valid JSON.
    """
    try:
        return json.loads(body)
    except ValueError as e:
        raise ParseError(f"Source {source} is not valid JSON: {e}") from e


async def fetch_document(client, source):
    """
    Retrieve one source and decode it as JSON.

    Args:
        client (httpx.AsyncClient): Client shared by the load sequence.
        source (str): URL, URL relative to the client's base URL, or local path.

    Returns:
        object: The decoded JSON document.

    Raises:
        RetrievalError: On transport failures, non-2xx statuses or unreadable files.
        ParseError: If a local file is not UTF-8 or the body is not valid JSON.
    """
    if is_remote_source(source, client):
        try:
            response = await client.get(source)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise RetrievalError(f"Failed to retrieve {source}: {e}") from e
        body = response.text
    else:
        try:
            body = Path(source).read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ParseError(f"Source {source} is not UTF-8 text: {e}") from e
        except OSError as e:
            raise RetrievalError(f"Failed to read {source}: {e}") from e

    return decode_document(body, source)
