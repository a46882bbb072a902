from .geo import GeoPoint
from .graph import EdgeKind, TransitEdge, TransitGraph, TransitNode
from .journey import Journey, JourneySegment, SegmentType
from .line import Line, LineType, TransportMode
from .stop import Correspondence, Stop

__all__ = [
    "Correspondence",
    "EdgeKind",
    "GeoPoint",
    "Journey",
    "JourneySegment",
    "Line",
    "LineType",
    "SegmentType",
    "Stop",
    "TransitEdge",
    "TransitGraph",
    "TransitNode",
    "TransportMode",
]
