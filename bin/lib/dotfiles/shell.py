"""External command execution."""

# ============================================================
# Imports
# ============================================================

import shutil
import subprocess
from pathlib import Path

from .config import Config
from .models import SetupError
from .output import print_info, print_trace


# ============================================================
# Commands
# ============================================================

def run(config: Config, command: list[str], cwd: Path | None = None, env: dict[str, str] | None = None) -> None:
    """
    Run an external command, failing fast on a non-zero exit.

    Echoes the command when tracing is enabled and only prints it in
    dry-run mode.

    Raises:
        subprocess.CalledProcessError: If the command exits non-zero
    """
    if config.trace or config.dryrun:
        print_trace(command)

    if config.dryrun:
        return

    subprocess.run(command, cwd=cwd, env=env, check=True)


def capture(config: Config, command: list[str], cwd: Path | None = None) -> str:
    """Run a read-only command and return its standard output."""
    if config.trace:
        print_trace(command)

    result = subprocess.run(
        command,
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True
    )
    return result.stdout


def command_exists(name: str) -> bool:
    """Check if an executable is available on PATH."""
    return shutil.which(name) is not None


def prompt(message: str) -> str:
    """
    Ask the user for a line of input.

    Raises:
        SetupError: If standard input is closed
    """
    print_info(f"> {message}")
    try:
        return input().strip()
    except EOFError:
        raise SetupError(f"No answer for '{message}' (input closed)") from None
