from .wordindex import WordIndex

__version__ = "0.3.0"

__all__ = ["WordIndex", "__version__"]
