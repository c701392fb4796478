"""contentctl: content repository and validation pipeline for a marketing site."""

__version__ = "0.1.0"
