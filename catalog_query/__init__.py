"""Catalog query layer: cached, paginated product queries over a remote catalog."""

__version__ = "0.1.0"
