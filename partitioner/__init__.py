"""Spatial partitioning of placed instances under a bit-size limit, with plotting and a benchmark command."""

__version__ = "0.1.0"
__all__ = ["geom", "instance", "grid", "partitioning", "viewer", "cli"]