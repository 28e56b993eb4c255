"""Interactive earthquake and tectonic plate web map."""

__version__ = "0.1.0"
