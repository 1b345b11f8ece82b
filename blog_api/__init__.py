"""Blog record service: CRUD and streaming list over a MongoDB collection."""

__version__ = "1.0.0"
