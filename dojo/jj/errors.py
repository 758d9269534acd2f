"""Classified failures of the external jj tool.

Classification is best-effort matching over jj's unversioned stderr text.
The table below is the only place that knows those strings; the raw stderr is
always preserved so unmatched failures stay displayable.
"""

from __future__ import annotations

from enum import Enum

from dojo.errors import DojoError


class ErrorKind(str, Enum):
    NOT_A_REPOSITORY = "not_a_repository"
    WORKSPACE_EXISTS = "workspace_exists"
    WORKSPACE_NOT_FOUND = "workspace_not_found"
    STALE_WORKING_COPY = "stale_working_copy"
    GENERIC = "generic"


# First match wins; compared case-insensitively against stderr.
CLASSIFICATION_TABLE: tuple[tuple[str, ErrorKind], ...] = (
    ("working copy is stale", ErrorKind.STALE_WORKING_COPY),
    ("no jj repo", ErrorKind.NOT_A_REPOSITORY),
    ("not a jj repo", ErrorKind.NOT_A_REPOSITORY),
    ("no such workspace", ErrorKind.WORKSPACE_NOT_FOUND),
    ("already exists", ErrorKind.WORKSPACE_EXISTS),
    ("destination path exists", ErrorKind.WORKSPACE_EXISTS),
)


def classify_stderr(stderr: str) -> ErrorKind:
    """Map jj stderr text to an ErrorKind."""
    lowered = stderr.lower()
    for needle, kind in CLASSIFICATION_TABLE:
        if needle in lowered:
            return kind
    return ErrorKind.GENERIC


class CommandError(DojoError):
    """A jj invocation failed.

    The underlying process failure (CalledProcessError, OSError) is chained
    as ``__cause__`` by the raiser.
    """

    def __init__(
        self,
        command: str,
        stderr: str = "",
        exit_code: int | None = None,
        kind: ErrorKind | None = None,
    ) -> None:
        self.command = command
        self.stderr = stderr.strip()
        self.exit_code = exit_code
        self.kind = kind if kind is not None else classify_stderr(self.stderr)
        super().__init__(str(self))

    def __str__(self) -> str:
        detail = self.stderr or f"exit status {self.exit_code}"
        return f"jj {self.command}: {detail}"

    @property
    def is_stale(self) -> bool:
        return self.kind is ErrorKind.STALE_WORKING_COPY

    @property
    def is_not_found(self) -> bool:
        return self.kind is ErrorKind.WORKSPACE_NOT_FOUND

    @property
    def is_not_repo(self) -> bool:
        return self.kind is ErrorKind.NOT_A_REPOSITORY

    @property
    def already_exists(self) -> bool:
        return self.kind is ErrorKind.WORKSPACE_EXISTS
