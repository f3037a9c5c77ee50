"""Async list state shared by every data consumer.

A ``ListState`` is the ``{data, loading, error}`` triple rendered by the
dashboard.  Transitions go through :func:`list_reducer`, which never mutates
the incoming state:

* ``LOADING`` sets ``loading`` and clears ``error``; data stays visible.
* ``SUCCESS`` replaces ``data`` and clears both ``loading`` and ``error``.
* ``ERROR`` records the message and clears ``loading``; the previous data is
  kept so the last-known-good view remains on screen.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ListActionType(str, Enum):
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ListState(BaseModel, Generic[T]):
    data: List[T] = Field(default_factory=list)
    loading: bool = False
    error: Optional[str] = None

    @property
    def phase(self) -> str:
        if self.loading:
            return "loading"
        if self.error is not None:
            return "error"
        return "success"

    @classmethod
    def initial(cls, loading: bool = True) -> "ListState[T]":
        return cls(data=[], loading=loading, error=None)


class ListAction(BaseModel, Generic[T]):
    type: ListActionType
    data: List[T] = Field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def loading(cls) -> "ListAction[T]":
        return cls(type=ListActionType.LOADING)

    @classmethod
    def success(cls, data: List[T]) -> "ListAction[T]":
        return cls(type=ListActionType.SUCCESS, data=list(data))

    @classmethod
    def failure(cls, error: str) -> "ListAction[T]":
        return cls(type=ListActionType.ERROR, error=error)


def list_reducer(state: ListState[T], action: ListAction[T]) -> ListState[T]:
    if action.type == ListActionType.LOADING:
        return state.model_copy(update={"loading": True, "error": None})
    if action.type == ListActionType.SUCCESS:
        return state.model_copy(
            update={"data": list(action.data), "loading": False, "error": None}
        )
    if action.type == ListActionType.ERROR:
        return state.model_copy(
            update={
                "loading": False,
                "error": action.error or "Unknown error",
            }
        )
    return state


def derive_state(source: ListState, data: List[T]) -> ListState[T]:
    """Wrap derived rows so they inherit the source's loading/error flags."""
    return ListState(data=list(data), loading=source.loading, error=source.error)
