"""Form CLI: terminal client for the form relay."""

__version__ = "0.1.0"
