"""GeoJSON document fetching and layer descriptor loading."""
