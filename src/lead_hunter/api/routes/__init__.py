"""Route group exports."""

from . import geographical, health, permits, routes

__all__ = ["permits", "routes", "health", "geographical"]
