"""Homebrew step — install Homebrew and the Brewfile bundle."""

# ============================================================
# Imports
# ============================================================

import os
import shutil
from pathlib import Path

from .config import Config
from .output import print_info, print_success
from .shell import run


INSTALL_SCRIPT_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"

BREW_CANDIDATES = [Path('/opt/homebrew/bin/brew'), Path('/usr/local/bin/brew')]


# ============================================================
# Entry Point
# ============================================================

def setup_homebrew(config: Config) -> None:
    """
    Install Homebrew if needed and apply the Brewfile.

    Steps:
    1. Install Homebrew unless a brew executable is found
    2. Put brew on PATH for the remaining steps
    3. Update, bundle, and clean up
    """
    brew = find_brew_executable()
    if brew is None:
        install_homebrew(config)
        brew = find_brew_executable() or Path("brew")

    activate_homebrew(brew)
    update_homebrew_packages(config, str(brew))


# ============================================================
# Installation
# ============================================================

def install_homebrew(config: Config) -> None:
    """Run the official non-interactive Homebrew installer."""
    print_info("Installing Homebrew")
    run(
        config,
        ["/bin/bash", "-c", f'/bin/bash -c "$(curl -fsSL {INSTALL_SCRIPT_URL})"'],
        env={**os.environ, "NONINTERACTIVE": "1"},
    )


def find_brew_executable() -> Path | None:
    """Return the brew executable on PATH or in a standard prefix."""
    on_path = shutil.which('brew')
    if on_path:
        return Path(on_path)

    for candidate in BREW_CANDIDATES:
        if candidate.exists():
            return candidate
    return None


def activate_homebrew(brew: Path) -> None:
    """Prepend brew's bin directory to PATH for this process and its children."""
    bin_dir = str(brew.parent)
    if not brew.is_absolute() or bin_dir in os.environ.get('PATH', '').split(os.pathsep):
        return
    os.environ['PATH'] = os.pathsep.join([bin_dir, os.environ.get('PATH', '')])


# ============================================================
# Packages
# ============================================================

def update_homebrew_packages(config: Config, brew: str) -> None:
    """Update Homebrew, install the Brewfile bundle, and clean up."""
    brewfile = config.repo_path("homebrew", "Brewfile")

    run(config, [brew, 'update'])
    if brewfile.exists():
        run(config, [brew, 'bundle', f'--file={brewfile}', '--cleanup'])
    else:
        print_info(f"No Brewfile at {brewfile}, skipping bundle")
    run(config, [brew, 'cleanup'])

    print_success("Homebrew packages up to date")
