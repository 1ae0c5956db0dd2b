"""lsgrid: directory listings packed into a grid of details tables."""

__version__ = "0.3.0"
