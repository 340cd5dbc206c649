import json

from webmaplab.exceptions import ConfigurationError
from webmaplab.types import LayerDescriptor

# Short keys used by hand-written layer lists
KEY_ALIASES = {"attr": "label_attribute", "src": "source"}
REQUIRED_KEYS = ("name", "label_attribute", "source")


def _normalize(item, index):
    if not isinstance(item, dict):
        raise ConfigurationError(f"Layer entry {index} must be an object, got {type(item).__name__}.")

    entry = {KEY_ALIASES.get(key, key): value for key, value in item.items()}
    missing = [key for key in REQUIRED_KEYS if not entry.get(key)]
    if missing:
        raise ConfigurationError(f"Layer entry {index} is missing {', '.join(missing)}.")

    style = entry.get("style") or {}
    if not isinstance(style, dict):
        raise ConfigurationError(f"Style of layer '{entry['name']}' must be an object.")

    return LayerDescriptor(
        name=str(entry["name"]),
        label_attribute=str(entry["label_attribute"]),
        source=str(entry["source"]),
        style=dict(style),
    )


def load_descriptors(path):
    """
    Load layer descriptors from a JSON file.

    The file holds either a list of layer objects or an object with a
    "layers" list. Each layer needs a name, a label attribute and a source
    ("attr" and "src" are accepted as short keys), plus an optional style.

    Args:
        path (str or pathlib.Path): Path to the JSON file.

    Returns:
        list[LayerDescriptor]: Descriptors in file order.

    Raises:
        ConfigurationError: If the file is not valid JSON, an entry is malformed,
            or two layers share a name.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except ValueError as e:
            raise ConfigurationError(f"Layer config {path} is not valid JSON: {e}") from e

    if isinstance(raw, dict):
        raw = raw.get("layers")
    if not isinstance(raw, list):
        raise ConfigurationError(f"Layer config {path} must contain a list of layers.")

    descriptors = [_normalize(item, i) for i, item in enumerate(raw)]

    seen = set()
    for descriptor in descriptors:
        if descriptor.name in seen:
            raise ConfigurationError(f"Duplicate layer name '{descriptor.name}' in {path}.")
        seen.add(descriptor.name)

    return descriptors
