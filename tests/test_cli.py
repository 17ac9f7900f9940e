"""Tests for the dotfiles-init command line."""

import io
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest

import dotfiles.cli as cli
from conftest import write
from dotfiles.models import Step


@pytest.fixture
def environment(monkeypatch: pytest.MonkeyPatch, repo: Path, home: Path) -> None:
    """Point the CLI at the temporary repository and home directory."""
    monkeypatch.setenv("DOTFILES_ROOT", str(repo))
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("TRACE", raising=False)


def test_help_prints_usage_and_runs_nothing(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """Scenario: --help prints usage, exits 0, performs no setup."""
    run_steps = MagicMock()
    monkeypatch.setattr(cli, "run_steps", run_steps)

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--help"])

    assert exc_info.value.code == 0
    assert "usage: dotfiles-init" in capsys.readouterr().out
    run_steps.assert_not_called()


def test_only_symlink_links_files(environment: None, repo: Path, home: Path) -> None:
    """Running a single step links the repository files."""
    source = write(repo / "zsh" / "zshrc.symlink")

    cli.main(["--only", "symlink"])

    assert (home / ".zshrc").resolve() == source.resolve()


def test_dry_run_flag_reaches_steps(environment: None, repo: Path, home: Path) -> None:
    write(repo / "zsh" / "zshrc.symlink")

    cli.main(["--only", "symlink", "--dry-run"])

    assert not (home / ".zshrc").exists()


def test_link_policy_flag_overrides_settings(environment: None, repo: Path, home: Path) -> None:
    write(repo / "dotfiles.toml", '[symlink]\npolicy = "overwrite"\n')
    write(repo / "zsh" / "zshrc.symlink")
    write(home / ".zshrc", "mine\n")

    cli.main(["--only", "symlink", "--link-policy", "skip"])

    assert (home / ".zshrc").read_text() == "mine\n"
    assert not (home / ".zshrc").is_symlink()


def test_default_run_uses_configured_steps(environment: None, repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Without --only the steps from dotfiles.toml are selected."""
    write(repo / "dotfiles.toml", 'steps = ["symlink", "git"]\n')
    run_steps = MagicMock()
    monkeypatch.setattr(cli, "run_steps", run_steps)

    cli.main([])

    _, steps = run_steps.call_args.args
    assert [step.name for step in steps] == ["git", "symlink"]


def test_list_prints_steps_and_runs_nothing(environment: None, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    run_steps = MagicMock()
    monkeypatch.setattr(cli, "run_steps", run_steps)

    cli.main(["--list"])

    assert "homebrew" in capsys.readouterr().out
    run_steps.assert_not_called()


def test_unknown_only_step_is_usage_error(environment: None) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--only", "nix"])
    assert exc_info.value.code == 2


def test_unknown_configured_step_exits_1(environment: None, repo: Path, capsys: pytest.CaptureFixture[str]) -> None:
    write(repo / "dotfiles.toml", 'steps = ["nix"]\n')

    with pytest.raises(SystemExit) as exc_info:
        cli.main([])

    assert exc_info.value.code == 1
    assert "nix" in capsys.readouterr().err


def test_failed_command_exits_with_its_status(environment: None, monkeypatch: pytest.MonkeyPatch) -> None:
    """A failing external command sets the exit status."""
    def fail(config: object) -> None:
        raise subprocess.CalledProcessError(3, ["brew", "update"])

    monkeypatch.setattr(cli, "select_steps", lambda names: [Step("brew", "", fail)])

    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 3


def test_interrupt_exits_130(environment: None, monkeypatch: pytest.MonkeyPatch) -> None:
    def interrupt(config: object) -> None:
        raise KeyboardInterrupt

    monkeypatch.setattr(cli, "select_steps", lambda names: [Step("wait", "", interrupt)])

    with pytest.raises(SystemExit) as exc_info:
        cli.main([])
    assert exc_info.value.code == 130


def test_prompt_with_closed_stdin_reports_message(environment: None, repo: Path, home: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """Closed input during the conflict prompt exits 1 with a readable error."""
    write(repo / "zsh" / "zshrc.symlink")
    write(home / ".zshrc", "mine\n")
    monkeypatch.setattr("sys.stdin", io.StringIO(""))

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--only", "symlink", "--link-policy", "prompt"])

    assert exc_info.value.code == 1
    assert "No answer for" in capsys.readouterr().err
