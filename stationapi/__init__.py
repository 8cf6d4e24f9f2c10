"""Railway station, line and company read API."""

__version__ = "0.1.0"
