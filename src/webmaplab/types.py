from dataclasses import dataclass, field
from typing import Any, TypedDict, Union

class StyleSpec(TypedDict, total=False):
    color: str
    weight: float
    opacity: float
    fillColor: str
    fillOpacity: float
    dashArray: str

@dataclass(frozen=True)
class LayerDescriptor:
    name: str
    label_attribute: str
    source: str
    style: StyleSpec = field(default_factory=dict)

@dataclass(frozen=True)
class Pending:
    descriptor: LayerDescriptor

    @property
    def name(self):
        return self.descriptor.name

@dataclass(frozen=True)
class Realized:
    name: str
    layer: Any

    def as_entry(self):
        return {self.name: self.layer}

LayerEntry = Union[Pending, Realized]
