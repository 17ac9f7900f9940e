"""Domain models for the dotfiles bootstrap."""

# ============================================================
# Imports
# ============================================================

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


# ============================================================
# Errors
# ============================================================

class SetupError(Exception):
    """Invalid user input or configuration that stops the bootstrap."""


# ============================================================
# Enums
# ============================================================

class LinkPolicy(Enum):
    """How to treat an object already occupying a destination path."""

    OVERWRITE = "overwrite"
    SKIP = "skip"
    BACKUP = "backup"
    PROMPT = "prompt"

    @classmethod
    def from_value(cls, value: str) -> 'LinkPolicy':
        """Parse a policy name from settings or the command line."""
        try:
            return cls(value)
        except ValueError:
            choices = ', '.join(policy.value for policy in cls)
            raise SetupError(f"Invalid link policy '{value}' (expected one of: {choices})") from None


class LinkStatus(Enum):
    """Status of a link operation after execution."""

    ALREADY_EXISTS = "Exists"
    CREATED = "Created"
    CREATED_DRYRUN = "Created (Not executed)"
    REPLACED = "Replaced"
    REPLACED_DRYRUN = "Replaced (Not executed)"
    BACKED_UP = "Backed up"
    BACKED_UP_DRYRUN = "Backed up (Not executed)"
    SKIPPED_EXISTING = "Skipped (destination exists)"


# ============================================================
# Source Models
# ============================================================

@dataclass(frozen=True)
class SourceFile:
    """
    A repository file or directory tagged for linking.

    Attributes:
        relative_path: Path relative to the repository root
        path: Absolute path inside the repository
        marker: Sentinel suffix that tagged the file
    """

    relative_path: Path
    path: Path
    marker: str

    @property
    def base_name(self) -> str:
        """File name with the sentinel marker stripped."""
        return strip_marker(self.relative_path.name, self.marker)


def strip_marker(name: str, marker: str) -> str:
    """Remove a trailing sentinel marker from a file name."""
    if marker and name.endswith(marker):
        return name[:-len(marker)]
    return name


# ============================================================
# Link Models
# ============================================================

@dataclass(frozen=True)
class LinkOperation:
    """
    A planned link with resolved paths.

    Attributes:
        source: The tagged source file
        destination_path: Computed location under the home directory
    """

    source: SourceFile
    destination_path: Path

    @property
    def source_path(self) -> Path:
        return self.source.path

    @property
    def source_name(self) -> str:
        return str(self.source.relative_path)


@dataclass(frozen=True)
class LinkResult:
    """
    Result of executing a link operation.

    Attributes:
        operation: The operation that was executed
        status: Status after execution
        backup_path: Where the previous destination was moved, if backed up
    """

    operation: LinkOperation
    status: LinkStatus
    backup_path: Path | None = None

    @property
    def source_name(self) -> str:
        return self.operation.source_name

    @property
    def destination_path(self) -> Path:
        return self.operation.destination_path

    def is_linked(self) -> bool:
        """Check if the destination now links to the source."""
        return self.status in (
            LinkStatus.ALREADY_EXISTS,
            LinkStatus.CREATED,
            LinkStatus.REPLACED,
            LinkStatus.BACKED_UP,
        )


# ============================================================
# Step Models
# ============================================================

@dataclass(frozen=True)
class Step:
    """
    A named, idempotent setup routine.

    Attributes:
        name: Identifier used on the command line and in dotfiles.toml
        description: One-line summary shown by --list
        run: Callable receiving the Config
    """

    name: str
    description: str
    run: Callable[[Any], Any]
