"""Configuration management."""

# ============================================================
# Imports
# ============================================================

import os
import subprocess
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

# Require Python 3.11+ for tomllib
if sys.version_info < (3, 11):
    print("Error: Python 3.11 or higher is required", file=sys.stderr)
    sys.exit(1)

import tomllib

from .models import LinkPolicy, SetupError


# ============================================================
# Defaults
# ============================================================

SETTINGS_FILE = "dotfiles.toml"

# bin/lib/dotfiles/ -> repository root
PACKAGE_DIR = Path(__file__).resolve().parent
FALLBACK_REPO_ROOT = PACKAGE_DIR.parents[2]

DEFAULT_MARKER = ".symlink"
DEFAULT_CONFIG_SUBTREE = "config"
DEFAULT_STEPS = ["macos", "homebrew", "git", "symlink", "zsh", "tmux", "asdf"]


# ============================================================
# Configuration
# ============================================================

class Config:
    """Configuration paths and settings passed to every setup step."""

    def __init__(self, repo_root: Path | None = None, home: Path | None = None, environ: Mapping[str, str] | None = None):
        environ = os.environ if environ is None else environ

        # Resolve directories
        self.repo_root = Path(repo_root) if repo_root else resolve_repo_root(environ)
        self.home = Path(home) if home else Path(environ.get('HOME') or Path.home())
        self.settings_toml = self.repo_root / SETTINGS_FILE
        self.volumes_root = Path("/Volumes")

        # Runtime flags
        self.dryrun = False
        self.trace = environ.get('TRACE', '0') == '1'

        # Symlink settings
        self.marker = DEFAULT_MARKER
        self.config_subtree = DEFAULT_CONFIG_SUBTREE
        self.link_policy = LinkPolicy.OVERWRITE

        # Step settings
        self.default_steps = list(DEFAULT_STEPS)
        self.git_author_name: str | None = None
        self.git_author_email: str | None = None
        self.repositories_volume: str | None = None

        apply_settings(self, load_settings(self.settings_toml))

    def repo_path(self, *parts: str) -> Path:
        """Build an absolute path inside the repository."""
        return self.repo_root.joinpath(*parts)


def resolve_repo_root(environ: Mapping[str, str]) -> Path:
    """
    Locate the dotfiles repository.

    Uses DOTFILES_ROOT when set, otherwise the git top-level of the directory
    holding this package, otherwise the directory above bin/. The current
    working directory is never consulted.
    """
    if environ.get('DOTFILES_ROOT'):
        return Path(environ['DOTFILES_ROOT']).expanduser()

    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            capture_output=True, text=True, check=True,
            cwd=PACKAGE_DIR,
        )
        return Path(result.stdout.strip())
    except (subprocess.CalledProcessError, FileNotFoundError):
        return FALLBACK_REPO_ROOT


# ============================================================
# TOML Loading
# ============================================================

def load_toml(path: Path) -> dict[str, Any]:
    """Load and parse a TOML file."""
    with open(path, 'rb') as f:
        return tomllib.load(f)


def load_settings(path: Path) -> dict[str, Any]:
    """
    Load dotfiles.toml.

    Returns an empty dict when the file is missing. A malformed file raises
    SetupError.
    """
    if not path.exists():
        return {}

    try:
        return load_toml(path)
    except tomllib.TOMLDecodeError as e:
        raise SetupError(f"Invalid {path.name}: {e}") from e


def apply_settings(config: Config, settings: dict[str, Any]) -> None:
    """Copy values from a parsed settings file onto the configuration."""
    if 'steps' in settings:
        steps = settings['steps']
        if not isinstance(steps, list) or not all(isinstance(name, str) for name in steps):
            raise SetupError("'steps' must be a list of step names")
        config.default_steps = list(steps)

    symlink = settings.get('symlink', {})
    config.marker = symlink.get('marker', config.marker)
    config.config_subtree = symlink.get('config_subtree', config.config_subtree)
    if 'policy' in symlink:
        config.link_policy = LinkPolicy.from_value(symlink['policy'])

    git = settings.get('git', {})
    config.git_author_name = git.get('author_name', config.git_author_name)
    config.git_author_email = git.get('author_email', config.git_author_email)

    macos = settings.get('macos', {})
    config.repositories_volume = macos.get('repositories_volume', config.repositories_volume)

    if not config.marker:
        raise SetupError("'symlink.marker' must not be empty")
