"""Song lists, playlist state and a client for a shared music server."""

__version__ = "0.1.0"