from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TransportMode(str, Enum):
    METRO = "metro"
    CERCANIAS = "cercanias"
    METRO_LIGERO = "metro_ligero"
    TRANVIA = "tranvia"
    BUS = "bus"
    WALKING = "walking"

    @property
    def display_name(self) -> str:
        return _MODE_DISPLAY_NAMES[self]

    @property
    def icon(self) -> str:
        return _MODE_ICONS[self]


_MODE_DISPLAY_NAMES: dict[TransportMode, str] = {
    TransportMode.METRO: "Metro",
    TransportMode.CERCANIAS: "Cercanías",
    TransportMode.METRO_LIGERO: "Metro Ligero",
    TransportMode.TRANVIA: "Tranvía",
    TransportMode.BUS: "Bus",
    TransportMode.WALKING: "Walking",
}

_MODE_ICONS: dict[TransportMode, str] = {
    TransportMode.METRO: "tram.fill",
    TransportMode.CERCANIAS: "train.side.front.car",
    TransportMode.METRO_LIGERO: "lightrail.fill",
    TransportMode.TRANVIA: "tram",
    TransportMode.BUS: "bus.fill",
    TransportMode.WALKING: "figure.walk",
}


class LineType(str, Enum):
    """Kind of network a line belongs to (as published by the operator)."""

    METRO = "metro"
    METRO_LIGERO = "metro_ligero"
    CERCANIAS = "cercanias"
    TRAM = "tram"
    FGC = "fgc"

    @property
    def transport_mode(self) -> TransportMode:
        return _LINE_TYPE_MODES[self]

    @classmethod
    def from_agency_id(cls, agency_id: str | None) -> LineType:
        agency = (agency_id or "").strip().upper()
        if agency == "METRO_LIGERO":
            return cls.METRO_LIGERO
        if agency == "TMB_METRO" or agency.startswith("METRO_"):
            return cls.METRO
        if agency == "FGC":
            return cls.FGC
        if agency.startswith(("TRANVIA_", "TRAM_")):
            return cls.TRAM
        return cls.CERCANIAS


# FGC rides like commuter rail.
_LINE_TYPE_MODES: dict[LineType, TransportMode] = {
    LineType.METRO: TransportMode.METRO,
    LineType.METRO_LIGERO: TransportMode.METRO_LIGERO,
    LineType.CERCANIAS: TransportMode.CERCANIAS,
    LineType.TRAM: TransportMode.TRANVIA,
    LineType.FGC: TransportMode.CERCANIAS,
}


@dataclass(frozen=True, slots=True)
class Line:
    """A transit line as listed by the line catalog."""

    id: str
    name: str
    type: LineType = LineType.METRO
    long_name: str | None = None
    color: str | None = None  # hex without '#'
    route_ids: tuple[str, ...] = ()

    @property
    def primary_route_id(self) -> str | None:
        return self.route_ids[0] if self.route_ids else None
