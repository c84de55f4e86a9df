"""Interface-aware multi-path route discovery."""

__version__ = "0.1.0"
