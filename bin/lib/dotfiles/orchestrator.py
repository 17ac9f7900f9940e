"""Setup step registry and sequencing."""

# ============================================================
# Imports
# ============================================================

from collections.abc import Iterable

from .config import Config
from .models import SetupError, Step
from .output import print_header, print_info, print_success
from .setup_git import setup_git
from .setup_homebrew import setup_homebrew
from .setup_macos import setup_macos
from .setup_shells import setup_fish, setup_tmux, setup_zsh
from .setup_tools import setup_asdf, setup_pkgx, setup_podman
from .symlinks import link_source_files


# ============================================================
# Registry
# ============================================================

# Registry order is execution order: Homebrew provides the tools later
# steps use, and git renders gitconfig before it is linked.
STEPS = [
    Step("macos", "Developer directory, system defaults, repositories volume", setup_macos),
    Step("homebrew", "Install Homebrew and the Brewfile bundle", setup_homebrew),
    Step("git", "Render the git identity into gitconfig", setup_git),
    Step("symlink", "Link tagged files into the home directory", link_source_files),
    Step("zsh", "Install the antidote plugin manager", setup_zsh),
    Step("tmux", "Install the tmux plugin manager", setup_tmux),
    Step("asdf", "Install asdf plugins and runtimes", setup_asdf),
    Step("pkgx", "Install node and npm through pkgx", setup_pkgx),
    Step("fish", "Make fish the login shell and update plugins", setup_fish),
    Step("podman", "Install the podman docker socket helper", setup_podman),
]


def select_steps(names: Iterable[str], registry: list[Step] = STEPS) -> list[Step]:
    """
    Return the named steps in registry order.

    Raises:
        SetupError: If a name is not registered
    """
    wanted = set(names)
    known = {step.name for step in registry}

    unknown = sorted(wanted - known)
    if unknown:
        raise SetupError(f"Unknown step(s): {', '.join(unknown)} (available: {', '.join(step.name for step in registry)})")

    return [step for step in registry if step.name in wanted]


# ============================================================
# Execution
# ============================================================

def run_steps(config: Config, steps: list[Step]) -> None:
    """Run steps in order. The first failure propagates and stops the run."""
    print_info("dotfiles")

    for step in steps:
        print_header(step.name)
        step.run(config)

    print()
    print_success("dotfiles complete")


def list_steps(config: Config, registry: list[Step] = STEPS) -> None:
    """Print registered steps, marking those run by default."""
    width = max(len(step.name) for step in registry)
    for step in registry:
        marker = "*" if step.name in config.default_steps else " "
        print_info(f"{marker} {step.name.ljust(width)}  {step.description}")
