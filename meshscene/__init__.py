"""Meshes, mesh builders, vector math and the state model of an interactive 3D scene."""

__version__ = "0.1.0"
__all__ = ["builders", "mesh", "meshutils", "vecmath", "viewport"]