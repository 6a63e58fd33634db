from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Any, Dict, List, Protocol, Sequence

from .definition import CalendarDefinition
from .types import AgeResult, CalendarDate, DayInfo

logger = logging.getLogger(__name__)


class CalendarEngineProtocol(Protocol):
    definition: CalendarDefinition

    def info(self) -> Dict[str, Any]: ...
    def to_ordinal(self, date: CalendarDate) -> int: ...
    def from_ordinal(self, ordinal: int) -> CalendarDate: ...
    def day_info(self, date: CalendarDate, *, attributes: Sequence[str] = ()) -> DayInfo: ...
    def elapsed(self, start: CalendarDate, end: CalendarDate) -> AgeResult: ...


@dataclass
class EngineRegistry:
    _engines: Dict[str, CalendarEngineProtocol]

    def get(self, name: str) -> CalendarEngineProtocol:
        if name not in self._engines:
            raise KeyError(f"Unknown calendar '{name}'. Available: {sorted(self._engines)}")
        return self._engines[name]

    def list(self) -> List[str]:
        return sorted(self._engines.keys())

    def register(self, name: str, engine: CalendarEngineProtocol, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._engines):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        logger.debug("Registering calendar %r", name)
        self._engines[name] = engine
