"""Model of a naval real-time strategy game: ships, weapons, maps, path finding and mission state."""

__version__ = "0.1.0"