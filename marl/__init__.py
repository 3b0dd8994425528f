"""Deezer ARL manager: extracts, caches and serves region-scoped ARL tokens."""

__version__ = "0.2.0"
