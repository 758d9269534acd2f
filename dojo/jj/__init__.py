"""Client for the jj version-control tool."""

from dojo.jj.client import JJClient
from dojo.jj.errors import CommandError, ErrorKind, classify_stderr
from dojo.jj.models import ChangeKind, LogEntry, Status, StatusChange, Workspace

__all__ = [
    "ChangeKind",
    "CommandError",
    "ErrorKind",
    "JJClient",
    "LogEntry",
    "Status",
    "StatusChange",
    "Workspace",
    "classify_stderr",
]
