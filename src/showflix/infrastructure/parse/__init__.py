from .client import HttpxParseCatalogClient

__all__ = ["HttpxParseCatalogClient"]
