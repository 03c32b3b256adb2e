from .catalog_backend import CatalogBackendPort

__all__ = ["CatalogBackendPort"]
