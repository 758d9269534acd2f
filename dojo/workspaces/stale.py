"""Single refresh-and-retry for reads that hit a stale working copy."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, TypeVar

from instrukt_ai_logging import get_logger

from dojo.jj.client import JJClient
from dojo.jj.errors import CommandError
from dojo.jj.models import Status
from dojo.workspaces.manager import WorkspaceManager

logger = get_logger(__name__)

T = TypeVar("T")


def with_stale_recovery(read: Callable[[], T], refresh: Callable[[], None]) -> T:
    """Run ``read``; on a stale working copy refresh once and retry once.

    A failed refresh is logged and the original stale error is re-raised with
    its cause intact. The retry's outcome, success or failure, is returned or
    raised unmodified.
    """
    try:
        return read()
    except CommandError as exc:
        if not exc.is_stale:
            raise
        try:
            refresh()
        except CommandError as refresh_error:
            logger.warning("Stale workspace refresh failed: %s", refresh_error)
            raise exc
        logger.info("Retrying read after refreshing stale workspace")
    return read()


class StaleRecoveringReader:
    """Diff and status reads that recover from stale workspaces."""

    def __init__(self, client: JJClient, manager: WorkspaceManager) -> None:
        self.client = client
        self.manager = manager

    def diff(self, path: str | Path | None = None, revision: str | None = None) -> str:
        directory = path or self.client.cwd or "."
        return with_stale_recovery(
            lambda: self.client.diff(revision=revision, cwd=path),
            lambda: self.manager.refresh(directory),
        )

    def status(self, path: str | Path | None = None) -> Status:
        directory = path or self.client.cwd or "."
        return with_stale_recovery(
            lambda: self.client.status(cwd=path),
            lambda: self.manager.refresh(directory),
        )
