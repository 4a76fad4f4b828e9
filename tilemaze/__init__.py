"""Tile-map geometry for maze games.

Subpackages:
- tilemap: TileGrid and WorldMap, the layered integer tile grids and their text format
- generators: random perfect mazes via Wilson's algorithm
- obstacles: tracing wall boundaries into ordered segment paths
- geometry: rectangle covers of orthogonal polygons
"""
