"""Content-based exercise recommender."""

__version__ = "0.1.0"
