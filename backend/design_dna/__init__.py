"""
Design DNA backend.

Deterministic color extraction and clustering for uploaded design
screenshots, plus the library-level aggregations built on top of them.
"""

__version__ = "1.0.0"
