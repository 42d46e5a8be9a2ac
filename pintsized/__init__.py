"""Headless core pieces of a small game engine: flags, bounded strings, ECS, tasks, camera and a GPU setup model."""

__version__ = "0.1.0"