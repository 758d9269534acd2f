"""Unit tests for jj stderr classification.

These strings track jj's human-readable output, which is not a stable
interface. A failure here after a jj upgrade is a compatibility break in
CLASSIFICATION_TABLE, not a regression in dojo.
"""

import pytest

from dojo.jj.errors import CommandError, ErrorKind, classify_stderr


@pytest.mark.parametrize(
    "stderr,kind",
    [
        ('Error: There is no jj repo in "."', ErrorKind.NOT_A_REPOSITORY),
        ("Error: not a jj repo: /tmp/x", ErrorKind.NOT_A_REPOSITORY),
        ("Error: Workspace named 'alpha' already exists", ErrorKind.WORKSPACE_EXISTS),
        ("Error: Destination path exists and is not an empty directory", ErrorKind.WORKSPACE_EXISTS),
        ("Error: No such workspace: alpha", ErrorKind.WORKSPACE_NOT_FOUND),
        (
            "Error: The working copy is stale (not updated since operation 1234).\n"
            "Hint: Run `jj workspace update-stale` to update it.",
            ErrorKind.STALE_WORKING_COPY,
        ),
        ("Error: something unexpected", ErrorKind.GENERIC),
        ("", ErrorKind.GENERIC),
    ],
)
def test_classify_stderr(stderr, kind):
    assert classify_stderr(stderr) is kind


def test_classification_is_case_insensitive():
    assert classify_stderr("ERROR: NO SUCH WORKSPACE: x") is ErrorKind.WORKSPACE_NOT_FOUND


def test_command_error_keeps_raw_stderr_for_unclassified_failures():
    error = CommandError("diff", stderr="  Error: disk on fire\n", exit_code=2)

    assert error.kind is ErrorKind.GENERIC
    assert error.stderr == "Error: disk on fire"
    assert str(error) == "jj diff: Error: disk on fire"


def test_command_error_without_stderr_reports_exit_status():
    error = CommandError("status", exit_code=3)

    assert str(error) == "jj status: exit status 3"


def test_explicit_kind_overrides_classification():
    error = CommandError("workspace root", stderr="boom", kind=ErrorKind.NOT_A_REPOSITORY)

    assert error.is_not_repo
    assert not error.is_stale


def test_kind_predicates():
    assert CommandError("diff", stderr="working copy is stale").is_stale
    assert CommandError("workspace forget", stderr="No such workspace: a").is_not_found
    assert CommandError("workspace add", stderr="already exists").already_exists
