"""A minimalist directory tree viewer with an interactive explorer."""

__version__ = "0.2.0"
__all__ = ["__version__"]