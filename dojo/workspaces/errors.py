"""Lifecycle errors that are not jj failures."""

from dojo.errors import DojoError


class WorkspaceError(DojoError):
    """A workspace lifecycle step failed outside of jj."""


class InvalidWorkspaceNameError(WorkspaceError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"invalid workspace name {name!r}: use letters, digits, '-' or '_'")


class ParentNotWritableError(WorkspaceError):
    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        message = f"cannot create workspaces in {path}: directory is not writable"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
