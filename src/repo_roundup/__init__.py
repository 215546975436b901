"""Multi-provider repository discovery for bulk cloning."""

__version__ = "0.3.0"
