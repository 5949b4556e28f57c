from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ...errors import IViewError
from .base import DocumentUseCase, UseCaseRequest, UseCaseResponse


class NavigationDirection(Enum):
    NEXT = "next"
    PREVIOUS = "previous"
    FIRST = "first"
    LAST = "last"
    INDEX = "index"


@dataclass(frozen=True)
class NavigateRequest(UseCaseRequest):
    direction: NavigationDirection = NavigationDirection.NEXT
    index: int = 0


@dataclass(frozen=True)
class NavigateResponse(UseCaseResponse):
    moved: bool = False
    index: Optional[int] = None
    path: Optional[Path] = None


class NavigateUseCase(DocumentUseCase):
    """Move through the files of the open folder."""

    def execute(self, request: NavigateRequest) -> NavigateResponse:
        collection = self._manager.collection
        before = collection.current_index
        try:
            document = self._step(request)
        except IViewError as exc:
            self._report(exc, "Navigation failed: %s", exc)
            return NavigateResponse(
                success=False,
                error=str(exc),
                moved=collection.current_index != before,
                index=collection.current_index,
                path=collection.current_path(),
            )
        return NavigateResponse(
            moved=document is not None and collection.current_index != before,
            index=collection.current_index,
            path=collection.current_path(),
        )

    def _step(self, request: NavigateRequest):
        direction = request.direction
        if direction is NavigationDirection.NEXT:
            return self._manager.next_document()
        if direction is NavigationDirection.PREVIOUS:
            return self._manager.previous_document()
        if direction is NavigationDirection.FIRST:
            return self._manager.go_to_index(0)
        if direction is NavigationDirection.LAST:
            return self._manager.go_to_index(len(self._manager.collection) - 1)
        return self._manager.go_to_index(request.index)
