"""Unit tests for jj output parsers."""

from dojo.jj.models import ChangeKind
from dojo.jj.parsing import parse_log, parse_status, parse_workspace_list


def test_parse_workspace_list_tolerates_blank_and_garbage_lines():
    output = "\n".join(
        [
            "default: qpvuntsm 230dd059 (empty) (no description set)",
            "",
            "this line has no separator",
            "agent-1: (no working copy)",
            "   ",
        ]
    )

    workspaces = parse_workspace_list(output)

    assert [ws.name for ws in workspaces] == ["default", "agent-1"]
    assert workspaces[0].current_change_id == "qpvuntsm"
    assert workspaces[1].current_change_id is None
    assert all(ws.path is None for ws in workspaces)


def test_parse_workspace_list_empty():
    assert parse_workspace_list("") == []


def test_parse_log_keeps_tabs_in_description():
    entries = parse_log("abc\t123\tfix:\tthings\nbroken line\n\ndef\t456\t\n")

    assert len(entries) == 2
    assert entries[0].description == "fix:\tthings"
    assert entries[1].change_id == "def"
    assert entries[1].description == ""


def test_parse_status_detects_conflicts():
    output = "Working copy changes:\nD old.txt\nR {a => b}\nThere are unresolved conflicts at these paths:\nx.txt\n"

    status = parse_status(output)

    assert [c.kind for c in status.changes] == [ChangeKind.DELETED, ChangeKind.RENAMED]
    assert status.has_conflicts
    assert status.raw == output


def test_parse_status_clean():
    status = parse_status("The working copy has no changes.\n")

    assert status.is_clean
