"""Shared fixtures for integration tests against a real jj binary."""

import shutil
import subprocess
from pathlib import Path

import pytest

from dojo.jj.client import JJClient
from dojo.workspaces.manager import WorkspaceManager
from dojo.workspaces.stale import StaleRecoveringReader

JJ = shutil.which("jj")


@pytest.fixture
def jj_env(tmp_path, monkeypatch):
    """Isolate jj from the developer's user config."""
    config = tmp_path / "jj-config.toml"
    config.write_text('[user]\nname = "Dojo Test"\nemail = "dojo@example.com"\n')
    monkeypatch.setenv("JJ_CONFIG", str(config))
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return config


@pytest.fixture
def jj_repo(tmp_path, jj_env) -> Path:
    if JJ is None:
        pytest.skip("jj is not installed")
    repo = tmp_path / "repo"
    repo.mkdir()
    subprocess.run([JJ, "git", "init"], cwd=repo, check=True, capture_output=True)
    (repo / "README.md").write_text("hello\n")
    subprocess.run([JJ, "commit", "-m", "initial"], cwd=repo, check=True, capture_output=True)
    # jj reports canonical paths; tmp dirs may sit behind symlinks.
    return repo.resolve()


@pytest.fixture
def client(jj_repo) -> JJClient:
    return JJClient(JJ, cwd=jj_repo)


@pytest.fixture
def manager(client, jj_repo) -> WorkspaceManager:
    return WorkspaceManager(client, root=str(jj_repo))


@pytest.fixture
def reader(client, manager) -> StaleRecoveringReader:
    return StaleRecoveringReader(client, manager)
