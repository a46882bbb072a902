from .routing import GraphSealedError, NetworkDataError, RoutingError, StopNotFound

__all__ = [
    "GraphSealedError",
    "NetworkDataError",
    "RoutingError",
    "StopNotFound",
]
