"""Events emitted when the authoritative document state changes.

UI-side caches (rendered pixmaps, filmstrips, info panels) subscribe to these
and treat themselves as stale read models once one arrives.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .bus import Event


@dataclass(kw_only=True)
class DocumentOpenedEvent(Event):
    path: Path
    kind: str
    width: int
    height: int


@dataclass(kw_only=True)
class DocumentClosedEvent(Event):
    path: Optional[Path] = None


@dataclass(kw_only=True)
class DocumentChangedEvent(Event):
    path: Optional[Path]
    reason: str
    width: int
    height: int


@dataclass(kw_only=True)
class NavigationChangedEvent(Event):
    index: Optional[int]
    path: Optional[Path]
    total: int


@dataclass(kw_only=True)
class ThumbnailReadyEvent(Event):
    path: Path
    page: int
