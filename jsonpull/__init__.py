"""A pull parser for JSON: read strings, numbers, bools, nulls and object fields one at a time."""

__version__ = "0.1.0"
__all__ = ["__version__"]