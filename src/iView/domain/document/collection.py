"""Ordered list of document paths with a navigation cursor."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional, TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - only for type checking
    from .base import BaseDocument


class DocumentCollection:
    """Paths of the folder being browsed plus the one loaded document.

    The loaded document is derived state: every successful change of the
    current index drops it so the caller reloads from the new path.
    """

    def __init__(self, paths: Iterable[Path] = ()) -> None:
        self._paths: list[Path] = [Path(p) for p in paths]
        self._index: Optional[int] = 0 if self._paths else None
        self._document: Optional["BaseDocument"] = None

    @classmethod
    def from_paths(cls, paths: Iterable[Path]) -> "DocumentCollection":
        return cls(paths)

    def __len__(self) -> int:
        return len(self._paths)

    def is_empty(self) -> bool:
        return not self._paths

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    @property
    def current_index(self) -> Optional[int]:
        return self._index

    def current_path(self) -> Optional[Path]:
        if self._index is None:
            return None
        return self._paths[self._index]

    def path_at(self, index: int) -> Optional[Path]:
        if 0 <= index < len(self._paths):
            return self._paths[index]
        return None

    def index_of(self, path: Path) -> Optional[int]:
        try:
            return self._paths.index(Path(path))
        except ValueError:
            return None

    # ------------------------------------------------------------------
    # Loaded document
    # ------------------------------------------------------------------
    @property
    def current_document(self) -> Optional["BaseDocument"]:
        return self._document

    def set_current_document(self, document: "BaseDocument") -> None:
        self._document = document

    def clear_current_document(self) -> None:
        self._document = None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def has_next(self) -> bool:
        return self._index is not None and self._index + 1 < len(self._paths)

    def has_previous(self) -> bool:
        return self._index is not None and self._index > 0

    def next(self) -> Optional[int]:
        """Advance the cursor; return the new index or ``None`` at the end."""
        if not self.has_next():
            return None
        self._move_to(self._index + 1)
        return self._index

    def previous(self) -> Optional[int]:
        if not self.has_previous():
            return None
        self._move_to(self._index - 1)
        return self._index

    def goto(self, index: int) -> bool:
        if not 0 <= index < len(self._paths):
            return False
        if index != self._index:
            self._move_to(index)
        return True

    def _move_to(self, index: int) -> None:
        self._index = index
        self._document = None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def add_path(self, path: Path) -> None:
        self._paths.append(Path(path))
        if self._index is None:
            self._index = 0

    def remove_at(self, index: int) -> Optional[Path]:
        """Remove and return the path at *index*.

        Removing the current entry drops the loaded document and keeps the
        cursor on whatever slid into its place, or on the new last entry.
        Removing an earlier entry shifts the cursor down by one.
        """
        if not 0 <= index < len(self._paths):
            return None
        removed = self._paths.pop(index)
        if self._index is not None:
            if self._index == index:
                self._document = None
                if not self._paths:
                    self._index = None
                elif self._index >= len(self._paths):
                    self._index = len(self._paths) - 1
            elif self._index > index:
                self._index -= 1
        return removed

    def clear(self) -> None:
        self._paths.clear()
        self._index = None
        self._document = None


__all__ = ["DocumentCollection"]
