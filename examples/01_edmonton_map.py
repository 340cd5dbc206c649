from pathlib import Path

from webmaplab.io.descriptors import load_descriptors
from webmaplab.viz import render_map

DATA_ROOT = Path(__file__).parent


def main():
    print("=== webmaplab: Edmonton overlay map ===")

    descriptors = load_descriptors(DATA_ROOT / "layers.json")

    # Parks and roads are loaded one after the other, then listed in the
    # layer control after the 'Enemies' marker layer
    for descriptor in descriptors:
        print(f"   - {descriptor.name}: {descriptor.source} (label: {descriptor.label_attribute})")

    shell = render_map("edmonton_map.html", descriptors=descriptors, data_root=DATA_ROOT)

    if shell.layer_selector is None:
        print("   Overlays failed to load; only the basemap is available.")
        return

    print(f"   Basemaps: {', '.join(shell.layer_selector.base_layers)}")
    print(f"   Overlays: {', '.join(shell.layer_selector.overlays)}")
    print("=== Done ===")


if __name__ == "__main__":
    main()
