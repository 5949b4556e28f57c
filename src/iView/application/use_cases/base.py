"""Request/response plumbing shared by the document use cases."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ...errors.handler import ErrorHandler
    from ..document_manager import DocumentManager


@dataclass(frozen=True)
class UseCaseRequest:
    """Input DTO base."""


@dataclass(frozen=True)
class UseCaseResponse:
    """Output DTO base; failures carry ``success=False`` and a message."""
    success: bool = True
    error: Optional[str] = None


class UseCase(ABC):
    @abstractmethod
    def execute(self, request: UseCaseRequest) -> UseCaseResponse:
        ...


class DocumentUseCase(UseCase):
    """A use case operating on the document held by a :class:`DocumentManager`."""

    def __init__(self, manager: "DocumentManager", errors: Optional["ErrorHandler"] = None):
        self._manager = manager
        self._errors = errors
        self._logger = logging.getLogger(type(self).__module__)

    @property
    def manager(self) -> "DocumentManager":
        return self._manager

    def _report(self, error: Exception, message: str, *args, context: Optional[dict] = None) -> None:
        """Hand a recovered failure to the error handler, or log it when there is none."""
        if self._errors is not None:
            self._errors.handle(error, context=context)
        else:
            self._logger.warning(message, *args)
