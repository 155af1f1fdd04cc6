from __future__ import annotations

from typing import Iterable


class FlowError(ValueError):
    """Base class for input problems the user can fix."""

    def __init__(self, message: str, row_ids: Iterable[str] = ()):
        super().__init__(message)
        self.message = message
        self.row_ids: list[str] = list(row_ids)


class MalformedHeader(FlowError):
    pass


class IncompleteRow(FlowError):
    pass


class NonPositiveValue(FlowError):
    pass


class EmptyResult(FlowError):
    pass
