class RoutingError(Exception):
    """Base exception for journey planning failures."""


class StopNotFound(RoutingError):
    """Raised when an origin or destination stop is not part of the network."""

    def __init__(self, stop_id: str) -> None:
        super().__init__(f"Stop not found: {stop_id}")
        self.stop_id = stop_id


class NetworkDataError(RoutingError):
    """Raised when the network data provider cannot deliver a resource."""


class GraphSealedError(RoutingError):
    """Raised when a built transit graph is modified."""
