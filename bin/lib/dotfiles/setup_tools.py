"""Tool steps — runtimes and helpers installed through asdf, pkgx, podman."""

# ============================================================
# Imports
# ============================================================

import subprocess
from pathlib import Path

from .config import Config
from .output import print_error, print_success, print_warning
from .shell import capture, command_exists, run


PKGX_PACKAGES = ["node", "npm"]


# ============================================================
# asdf
# ============================================================

def setup_asdf(config: Config) -> None:
    """
    Install asdf plugins and runtimes from the tool-versions file.

    Steps:
    1. Read plugin names from asdf/tool-versions<marker>
    2. Add plugins that are not installed yet
    3. Run asdf install from the home directory
    """
    if not command_exists('asdf'):
        print_warning("Skipping asdf (asdf not found)")
        return

    tool_versions = config.repo_path("asdf", f"tool-versions{config.marker}")
    if not tool_versions.exists():
        print_warning(f"Skipping asdf ({tool_versions} not found)")
        return

    installed = list_installed_plugins(config)
    for plugin in read_required_plugins(tool_versions):
        if plugin not in installed:
            run(config, ['asdf', 'plugin', 'add', plugin])

    run(config, ['asdf', 'install'], cwd=config.home)
    print_success("asdf tools installed")


def read_required_plugins(tool_versions: Path) -> list[str]:
    """Return the first column of each entry in a .tool-versions file."""
    plugins = []
    for line in tool_versions.read_text().splitlines():
        line = line.split('#', 1)[0].strip()
        if line:
            plugins.append(line.split()[0])
    return plugins


def list_installed_plugins(config: Config) -> set[str]:
    """Return installed asdf plugins, or an empty set if none can be listed."""
    try:
        output = capture(config, ['asdf', 'plugin', 'list'])
    except subprocess.CalledProcessError:
        return set()
    return {line.strip() for line in output.splitlines() if line.strip()}


# ============================================================
# pkgx
# ============================================================

def setup_pkgx(config: Config) -> None:
    """Install node and npm through pkgx."""
    if not command_exists('pkgx'):
        print_error("pkgx command not found")
        return

    for package in PKGX_PACKAGES:
        run(config, ['pkgx', 'install', package])

    print_success("pkgx packages installed")


# ============================================================
# podman
# ============================================================

def setup_podman(config: Config) -> None:
    """Let podman provide a docker-compatible socket."""
    if not command_exists('podman-mac-helper'):
        print_warning("Skipping podman (podman-mac-helper not found)")
        return

    run(config, ['sudo', 'podman-mac-helper', 'install'])
    print_success("podman docker socket installed")
