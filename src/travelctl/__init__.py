"""travelctl — track visited countries, visits, visas, and travel statistics."""

__version__ = "0.1.0"
