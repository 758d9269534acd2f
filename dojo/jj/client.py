"""Synchronous client for the jj command-line tool.

Every call spawns ``jj`` with an explicit working directory; the client keeps
no state beyond the executable path and a default directory, so one instance
can be shared by concurrent workers.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Union

from instrukt_ai_logging import get_logger

from dojo.constants import DEFAULT_JJ_PATH
from dojo.jj.errors import CommandError, ErrorKind
from dojo.jj.models import LogEntry, Status, Workspace
from dojo.jj.parsing import LOG_TEMPLATE, parse_log, parse_status, parse_workspace_list

logger = get_logger(__name__)

PathLike = Union[str, Path]


class JJClient:
    """Thin argument-building layer over ``jj`` subprocess calls."""

    def __init__(self, jj_path: str = DEFAULT_JJ_PATH, cwd: PathLike | None = None) -> None:
        """Initialize client.

        Args:
            jj_path: Executable to invoke.
            cwd: Default working directory for calls that do not pass one.
                None means the directory the process was started in.
        """
        self.jj_path = jj_path
        self.cwd = str(cwd) if cwd is not None else None

    def run(self, *args: str) -> str:
        """Run jj in the client's default directory and return trimmed stdout."""
        return self.run_in_dir(None, *args)

    def run_in_dir(self, directory: PathLike | None, *args: str) -> str:
        """Run jj in ``directory`` and return trimmed stdout.

        Raises:
            CommandError: jj could not be started or exited non-zero.
        """
        workdir = str(directory) if directory else self.cwd
        command = " ".join(args)
        logger.debug("jj %s (cwd=%s)", command, workdir or ".")
        try:
            result = subprocess.run(
                [self.jj_path, *args],
                cwd=workdir,
                capture_output=True,
                text=True,
                stdin=subprocess.DEVNULL,
                check=True,
            )
        except subprocess.CalledProcessError as exc:
            error = CommandError(command, stderr=exc.stderr or "", exit_code=exc.returncode)
            logger.warning("jj %s failed (%s): %s", command, error.kind.value, error.stderr)
            raise error from exc
        except OSError as exc:
            logger.error("Failed to start %s: %s", self.jj_path, exc)
            raise CommandError(command, stderr=str(exc), kind=ErrorKind.GENERIC) from exc
        return result.stdout.strip()

    # --- Workspaces ---

    def workspace_add(
        self,
        path: PathLike,
        revision: str | None = None,
        name: str | None = None,
        cwd: PathLike | None = None,
    ) -> None:
        """Create a workspace at ``path`` (jj names it after the directory by default)."""
        args = ["workspace", "add"]
        if name:
            args += ["--name", name]
        if revision:
            args += ["-r", revision]
        args.append(str(path))
        self.run_in_dir(cwd, *args)

    def workspace_forget(self, name: str, cwd: PathLike | None = None) -> None:
        """Forget a workspace. The directory is left on disk."""
        self.run_in_dir(cwd, "workspace", "forget", name)

    def workspace_list(self, cwd: PathLike | None = None) -> list[Workspace]:
        return parse_workspace_list(self.run_in_dir(cwd, "workspace", "list"))

    def workspace_root(self, cwd: PathLike | None = None) -> str:
        """Return the root of the workspace containing ``cwd``.

        Raises:
            CommandError: always classified as NOT_A_REPOSITORY.
        """
        try:
            return self.run_in_dir(cwd, "workspace", "root")
        except CommandError as exc:
            if exc.is_not_repo:
                raise
            raise CommandError(
                exc.command, stderr=exc.stderr, exit_code=exc.exit_code, kind=ErrorKind.NOT_A_REPOSITORY
            ) from exc

    def workspace_update_stale(self, cwd: PathLike | None = None) -> None:
        """Bring a stale working copy up to date with the repository."""
        self.run_in_dir(cwd, "workspace", "update-stale")

    # --- Reads ---

    def diff(self, revision: str | None = None, cwd: PathLike | None = None) -> str:
        """Return the raw diff with ANSI colour codes."""
        args = ["diff", "--color=always"]
        if revision:
            args += ["-r", revision]
        return self.run_in_dir(cwd, *args)

    def status_text(self, cwd: PathLike | None = None) -> str:
        return self.run_in_dir(cwd, "status")

    def status(self, cwd: PathLike | None = None) -> Status:
        return parse_status(self.status_text(cwd))

    def log(
        self,
        limit: int | None = None,
        revisions: str | None = None,
        cwd: PathLike | None = None,
    ) -> list[LogEntry]:
        args = ["log", "--no-graph", "-T", LOG_TEMPLATE]
        if revisions:
            args += ["-r", revisions]
        if limit is not None:
            args += ["-n", str(limit)]
        return parse_log(self.run_in_dir(cwd, *args))

    def working_copy_change_id(self, cwd: PathLike | None = None) -> str:
        return self.run_in_dir(cwd, "log", "-r", "@", "--no-graph", "-T", "change_id.short()")

    def parent_change_id(self, cwd: PathLike | None = None) -> str:
        output = self.run_in_dir(cwd, "log", "-r", "@-", "--no-graph", "-T", r'change_id.short() ++ "\n"')
        lines = [line for line in output.splitlines() if line.strip()]
        return lines[0].strip() if lines else ""

    # --- Mutations ---

    def describe(self, message: str, revision: str | None = None, cwd: PathLike | None = None) -> None:
        args = ["describe"]
        if revision:
            args.append(revision)
        args += ["-m", message]
        self.run_in_dir(cwd, *args)

    def commit(self, message: str, cwd: PathLike | None = None) -> None:
        self.run_in_dir(cwd, "commit", "-m", message)

    def squash(
        self,
        from_rev: str | None = None,
        into_rev: str | None = None,
        cwd: PathLike | None = None,
    ) -> None:
        """Squash the working copy into its parent, or ``from_rev`` into ``into_rev``."""
        args = ["squash"]
        if from_rev:
            args += ["--from", from_rev]
        if into_rev:
            args += ["--into", into_rev]
        self.run_in_dir(cwd, *args)

    def rebase(self, destination: str, cwd: PathLike | None = None) -> None:
        self.run_in_dir(cwd, "rebase", "-d", destination)

    def new(self, revision: str | None = None, cwd: PathLike | None = None) -> None:
        args = ["new"]
        if revision:
            args.append(revision)
        self.run_in_dir(cwd, *args)

    def git_push(self, bookmark: str | None = None, cwd: PathLike | None = None) -> None:
        args = ["git", "push"]
        if bookmark:
            args += ["--bookmark", bookmark]
        self.run_in_dir(cwd, *args)
