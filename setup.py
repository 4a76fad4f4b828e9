"""Build configuration for tilemaze."""

from setuptools import find_namespace_packages, setup

setup(
    name="tilemaze",
    version="0.1.0",
    description=(
        "Tile-map geometry for maze games: layered tile grids, Wilson maze "
        "generation, wall path tracing and rectangle decomposition"
    ),
    python_requires=">=3.12",
    packages=find_namespace_packages(include=["tilemaze", "tilemaze.*"]),
    install_requires=[
        "numpy>=1.26",
        "tcod>=16.2",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
)
