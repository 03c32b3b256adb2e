from .catalog_browse import CatalogBrowseUseCase
from .load_detail import LoadDetailUseCase
from .resolve_stream import ResolveStreamUseCase

__all__ = ["CatalogBrowseUseCase", "LoadDetailUseCase", "ResolveStreamUseCase"]
