"""Multi-objective route planning over GTFS transit feeds."""

__version__ = "0.1.0"
__all__ = ["types", "transit_data", "router", "cli"]