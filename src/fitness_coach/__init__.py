"""Program scheduling and adaptive workout generation for personal coaching."""

__version__ = "0.1.0"
