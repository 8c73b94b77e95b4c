"""SetKit — film-production equipment catalog and package builder."""

__version__ = "0.3.0"
