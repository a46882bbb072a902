from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models import Line


class ILineCatalog(ABC):
    """Port for the static catalog of lines in the network."""

    @abstractmethod
    async def list_lines(self) -> tuple[Line, ...]:
        raise NotImplementedError
