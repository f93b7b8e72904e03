"""A tiny block-building voxel sandbox: world model, camera, input state and an OpenGL game window."""

__version__ = "0.1.0"