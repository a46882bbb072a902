from .line_catalog import ILineCatalog
from .network_data_provider import INetworkDataProvider

__all__ = [
    "ILineCatalog",
    "INetworkDataProvider",
]
