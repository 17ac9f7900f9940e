"""Shell steps — zsh and tmux plugin managers, fish as login shell."""

# ============================================================
# Imports
# ============================================================

import shlex
from pathlib import Path

from .config import Config
from .output import print_info, print_success, print_warning
from .shell import run


ANTIDOTE_REPOSITORY = "https://github.com/mattmc3/antidote.git"
TPM_REPOSITORY = "https://github.com/tmux-plugins/tpm"

FISH_PATH = Path('/opt/homebrew/bin/fish')
SHELLS_FILE = Path('/etc/shells')


# ============================================================
# Entry Points
# ============================================================

def setup_zsh(config: Config) -> None:
    """Install the antidote plugin manager for zsh."""
    target = config.home / ".config" / "zsh" / "antidote"
    clone_repository(config, ANTIDOTE_REPOSITORY, target, shallow=True)


def setup_tmux(config: Config) -> None:
    """Install the tmux plugin manager."""
    target = config.home / ".tmux" / "plugins" / "tpm"
    clone_repository(config, TPM_REPOSITORY, target)


def setup_fish(config: Config) -> None:
    """Register fish as login shell and update its plugins."""
    if not FISH_PATH.exists():
        print_warning(f"Skipping fish setup ({FISH_PATH} not found)")
        return

    if not is_registered_shell(FISH_PATH):
        register_login_shell(config, FISH_PATH)

    run(config, [str(FISH_PATH), '-c', 'fisher update'])
    print_success("fish plugins up to date")


# ============================================================
# Plugin Managers
# ============================================================

def clone_repository(config: Config, url: str, target: Path, shallow: bool = False) -> None:
    """Clone a repository unless the target directory already exists."""
    if target.is_dir():
        print_info(f"{target} already exists")
        return

    command = ['git', 'clone']
    if shallow:
        command.append('--depth=1')
    run(config, command + [url, str(target)])

    print_success(f"Cloned {url}")


# ============================================================
# Login Shell
# ============================================================

def is_registered_shell(shell_path: Path) -> bool:
    """Check if a shell is listed in /etc/shells."""
    try:
        registered = SHELLS_FILE.read_text().splitlines()
    except FileNotFoundError:
        return False
    return str(shell_path) in (line.strip() for line in registered)


def register_login_shell(config: Config, shell_path: Path) -> None:
    """Append the shell to /etc/shells and make it the login shell."""
    append_line = f"echo {shlex.quote(str(shell_path))} >> {shlex.quote(str(SHELLS_FILE))}"
    run(config, ['sudo', 'sh', '-c', append_line])
    run(config, ['chsh', '-s', str(shell_path)])

    print_success(f"Login shell set to {shell_path}")
