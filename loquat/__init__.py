"""Routing, streams, graceful shutdown, caching, error handling and web API types for bot frameworks."""

__version__ = "0.1.0"