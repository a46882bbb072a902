from .http_transit_api import HttpTransitApi

__all__ = ["HttpTransitApi"]
