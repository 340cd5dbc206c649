from .core import MapShell
from .types import LayerDescriptor
from .__about__ import __version__
