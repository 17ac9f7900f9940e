"""Shared fixtures: a throwaway repository and home directory."""

from pathlib import Path

import pytest

from dotfiles.config import Config


@pytest.fixture
def repo(tmp_path: Path) -> Path:
    path = tmp_path / "repo"
    path.mkdir()
    return path


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def config(repo: Path, home: Path) -> Config:
    """Config bound to the temporary repo and home, ignoring the real environment."""
    return Config(repo_root=repo, home=home, environ={})


def write(path: Path, content: str = "") -> Path:
    """Create a file and its parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path
