"""Route group exports."""

from . import health, points, routes

__all__ = ["points", "routes", "health"]
