"""Typed results parsed from jj output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Workspace:
    """A jj workspace. ``path`` is None when jj did not report it."""

    name: str
    path: str | None = None
    current_change_id: str | None = None


@dataclass(frozen=True)
class LogEntry:
    change_id: str
    commit_id: str
    description: str = ""


class ChangeKind(str, Enum):
    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"


@dataclass(frozen=True)
class StatusChange:
    kind: ChangeKind
    path: str


@dataclass(frozen=True)
class Status:
    """Parsed ``jj status``; ``raw`` keeps the full text for display."""

    changes: list[StatusChange] = field(default_factory=list)
    has_conflicts: bool = False
    raw: str = ""

    @property
    def is_clean(self) -> bool:
        return not self.changes and not self.has_conflicts
