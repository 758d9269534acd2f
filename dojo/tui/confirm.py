"""Confirmation overlay."""

from __future__ import annotations

from dojo.tui.commands import Cmd, emit
from dojo.tui.messages import ConfirmResult, KeyPressed, Msg

CONFIRM_KEYS = frozenset({"y", "Y"})
DECLINE_KEYS = frozenset({"n", "N", "escape"})


class ConfirmModel:
    """Yes/no prompt carrying an opaque action and payload.

    While visible it consumes every key; answering hides it and emits a
    ConfirmResult with the action and payload it was shown with.
    """

    def __init__(self) -> None:
        self.visible = False
        self.prompt = ""
        self.action = ""
        self.payload: object = None

    def init(self) -> Cmd | None:
        return None

    def show(self, prompt: str, action: str, payload: object = None) -> None:
        self.visible = True
        self.prompt = prompt
        self.action = action
        self.payload = payload

    def hide(self) -> None:
        self.visible = False
        self.prompt = ""
        self.action = ""
        self.payload = None

    def update(self, msg: Msg) -> Cmd | None:
        if not self.visible or not isinstance(msg, KeyPressed):
            return None
        if msg.key in CONFIRM_KEYS:
            confirmed = True
        elif msg.key in DECLINE_KEYS:
            confirmed = False
        else:
            return None
        result = ConfirmResult(confirmed=confirmed, action=self.action, payload=self.payload)
        self.hide()
        return emit(result)

    def view(self) -> str:
        if not self.visible:
            return ""
        return f"{self.prompt} (y/n)"
