"""
List view state shared by every data-fetch-then-render view.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, List, Optional, TypeVar

R = TypeVar("R")


class ViewState(str, Enum):
    LOADED = "loaded"
    FAILED = "failed"  # recoverable; the viewer retries by reloading


@dataclass
class ListView(Generic[R]):
    """Rows ready to render, or the failure message to show instead."""
    state: ViewState
    rows: List[R] = field(default_factory=list)
    error: Optional[str] = None

    @classmethod
    def loaded(cls, rows: List[R]) -> "ListView[R]":
        return cls(state=ViewState.LOADED, rows=rows)

    @classmethod
    def failed(cls, what: str) -> "ListView[R]":
        return cls(state=ViewState.FAILED, error=f"Failed to load {what}")

    @property
    def is_empty(self) -> bool:
        return self.state == ViewState.LOADED and not self.rows
