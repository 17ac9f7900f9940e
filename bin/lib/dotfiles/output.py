"""Formatted output utilities."""

# ============================================================
# Imports
# ============================================================

import shlex
import sys


# ============================================================
# Configuration
# ============================================================

class Color:
    """ANSI color codes for terminal output."""

    RESET = '\033[0m'
    BOLD = '\033[1m'
    RED = '\033[31m'
    CYAN = '\033[36m'
    GREEN = '\033[32m'
    YELLOW = '\033[33m'
    GRAY = '\033[90m'


# ============================================================
# Output Functions
# ============================================================

def print_header(message: str) -> None:
    """Print a section header with bold cyan formatting."""
    print()
    print(f"{Color.BOLD}{Color.CYAN}# {message}{Color.RESET}")
    print()


def print_info(message: str) -> None:
    print(message)


def print_error(message: str) -> None:
    """Print an error message to stderr with 'Error:' prefix."""
    print(f"{Color.RED}Error:{Color.RESET} {message}", file=sys.stderr)


def print_success(message: str) -> None:
    print(f"{Color.GREEN}{message}{Color.RESET}")


def print_warning(message: str) -> None:
    print(f"{Color.YELLOW}{message}{Color.RESET}")


def print_trace(command: list[str]) -> None:
    """Echo a command to stderr before it runs, like `set -o xtrace`."""
    print(f"{Color.GRAY}+ {shlex.join(command)}{Color.RESET}", file=sys.stderr)


def print_link_status(source_name: str, status: str, status_color: str, destination: str, monochrome: bool = False) -> None:
    """
    Print a formatted link status line.

    Args:
        source_name: Repository-relative path of the source file
        status: Status message (e.g., "Exists", "Created")
        status_color: Color constant for the status (e.g., Color.GREEN)
        destination: Destination path of the link
        monochrome: If True, use status_color for the entire line
    """
    if monochrome:
        print(f"{status_color}[{source_name}] {status} -> {destination}{Color.RESET}")
    else:
        print(f"[{Color.CYAN}{source_name}{Color.RESET}] {status_color}{status}{Color.RESET} -> {destination}")
