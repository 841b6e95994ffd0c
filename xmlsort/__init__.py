"""xmlsort — canonical ordering for XML configuration and data files."""

__version__ = "0.1.0"
