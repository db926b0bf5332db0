"""UDBuildings: versioned SQLite store for building locations."""

__version__ = "0.1.0"
