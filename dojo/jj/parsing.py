"""Parsers for jj text output.

Every parser skips blank and unrecognised lines instead of failing, so
cosmetic changes in jj's output degrade to missing fields, not crashes.
"""

from __future__ import annotations

import re

from dojo.jj.models import ChangeKind, LogEntry, Status, StatusChange, Workspace

# Fields are tab-separated; the description goes last so embedded tabs survive.
LOG_TEMPLATE = r'change_id.short() ++ "\t" ++ commit_id.short() ++ "\t" ++ description.first_line() ++ "\n"'

_CHANGE_ID = re.compile(r"^[a-z0-9]+$")
_STATUS_LINE = re.compile(r"^([AMDRC]) (.+)$")


def parse_workspace_list(output: str) -> list[Workspace]:
    """Parse ``jj workspace list`` lines of the form ``name: change commit ...``."""
    workspaces: list[Workspace] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        name, sep, rest = line.partition(": ")
        if not sep or not name:
            continue
        tokens = rest.split()
        change_id = tokens[0] if tokens and _CHANGE_ID.match(tokens[0]) else None
        workspaces.append(Workspace(name=name, current_change_id=change_id))
    return workspaces


def parse_log(output: str) -> list[LogEntry]:
    """Parse ``jj log --no-graph -T LOG_TEMPLATE`` output."""
    entries: list[LogEntry] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        parts = line.split("\t", 2)
        if len(parts) < 2 or not parts[0] or not parts[1]:
            continue
        description = parts[2].strip() if len(parts) == 3 else ""
        entries.append(LogEntry(change_id=parts[0].strip(), commit_id=parts[1].strip(), description=description))
    return entries


def parse_status(output: str) -> Status:
    """Parse ``jj status`` into change entries and a conflict flag."""
    changes: list[StatusChange] = []
    for line in output.splitlines():
        match = _STATUS_LINE.match(line.rstrip())
        if not match:
            continue
        changes.append(StatusChange(kind=ChangeKind(match.group(1)), path=match.group(2)))
    has_conflicts = "unresolved conflicts" in output.lower()
    return Status(changes=changes, has_conflicts=has_conflicts, raw=output)
