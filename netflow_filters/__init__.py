"""netflow-filters: filter model and query compiler for network flow consoles."""

__version__ = "0.1.0"
