"""Capability set shared by the TUI models."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from dojo.tui.commands import Cmd
from dojo.tui.messages import Msg


@runtime_checkable
class Model(Protocol):
    """A pane model: mutated only by ``update``, one message at a time."""

    def init(self) -> Cmd | None: ...

    def update(self, msg: Msg) -> Cmd | None: ...

    def view(self) -> str: ...
