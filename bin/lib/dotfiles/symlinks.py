"""Symlink discovery and installation."""

# ============================================================
# Imports
# ============================================================

import os
import shutil
from collections.abc import Callable, Iterator
from pathlib import Path

from .config import Config
from .models import (
    LinkOperation,
    LinkPolicy,
    LinkResult,
    LinkStatus,
    SetupError,
    SourceFile,
    strip_marker,
)
from .output import Color, print_info, print_link_status, print_warning


SKIPPED_DIRECTORIES = {'.git', '.hg', '.svn', '.venv', '__pycache__', 'node_modules'}

PROMPT_CHOICES = {
    's': (LinkPolicy.SKIP, False),
    'S': (LinkPolicy.SKIP, True),
    'o': (LinkPolicy.OVERWRITE, False),
    'O': (LinkPolicy.OVERWRITE, True),
    'b': (LinkPolicy.BACKUP, False),
    'B': (LinkPolicy.BACKUP, True),
}


# ============================================================
# Entry Point
# ============================================================

def link_source_files(config: Config) -> list[LinkResult]:
    """
    Link every tagged source file into the home directory.

    Process:
    1. Discover files and directories ending in the marker
    2. Compute each destination path
    3. Replace, back up, or skip whatever occupies the destination
    4. Create the link

    Args:
        config: Configuration object

    Returns:
        List of results, one per source file
    """
    operations = plan_link_operations(config)
    if not operations:
        print_warning(f"No files ending in {config.marker} found in {config.repo_root}")
        return []

    resolver = ConflictResolver(config.link_policy)
    results: list[LinkResult] = []

    for operation in operations:
        result = apply_link_operation(config, operation, resolver)
        results.append(result)
        print_link_result(result)

    return results


# ============================================================
# Discovery
# ============================================================

def find_source_files(repo_root: Path, marker: str) -> list[SourceFile]:
    """
    Find files and directories whose name ends in the marker.

    Matched directories are linked as a whole, so the walk does not
    descend into them. Results are sorted by relative path.
    """
    root = repo_root.absolute()
    sources = [
        SourceFile(relative_path=path.relative_to(root), path=path, marker=marker)
        for path in walk_tagged_paths(root, marker)
    ]
    return sorted(sources, key=lambda source: source.relative_path.as_posix())


def walk_tagged_paths(root: Path, marker: str) -> Iterator[Path]:
    """Yield tagged paths below root, pruning VCS and tooling directories."""
    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)

        # Prune in place so os.walk skips these subtrees
        kept = []
        for name in sorted(dirnames):
            if name in SKIPPED_DIRECTORIES:
                continue
            if is_tagged(name, marker):
                yield current / name
                continue
            kept.append(name)
        dirnames[:] = kept

        for name in sorted(filenames):
            if is_tagged(name, marker):
                yield current / name


def is_tagged(name: str, marker: str) -> bool:
    """Check if a name carries the marker and something before it."""
    return name.endswith(marker) and len(name) > len(marker)


# ============================================================
# Path Mapping
# ============================================================

def resolve_destination(relative_path: Path, home: Path, marker: str, config_subtree: str) -> Path:
    """
    Compute where a source file is linked in the home directory.

    Files under the config subtree (``config/`` or ``.config/``) keep their
    nested layout below ``~/.config``. Everything else is flattened to
    ``~/.<name>`` regardless of depth.

    Examples:
        zsh/zshrc.symlink              -> ~/.zshrc
        config/nvim.symlink            -> ~/.config/nvim
        .config/tmux/tmux.conf.symlink -> ~/.config/tmux/tmux.conf

    Args:
        relative_path: Source path relative to the repository root
        home: Home directory
        marker: Sentinel suffix to strip
        config_subtree: Name of the subtree mirrored under ~/.config

    Returns:
        Absolute destination path
    """
    parts = relative_path.parts
    name = strip_marker(parts[-1], marker)

    top_level = parts[0].lstrip('.')
    if config_subtree and len(parts) > 1 and top_level == config_subtree:
        return home.joinpath(f".{top_level}", *parts[1:-1], name)

    return home / f".{name.lstrip('.')}"


def plan_link_operations(config: Config) -> list[LinkOperation]:
    """Map every discovered source file to its destination."""
    return [
        LinkOperation(
            source=source,
            destination_path=resolve_destination(source.relative_path, config.home, config.marker, config.config_subtree),
        )
        for source in find_source_files(config.repo_root, config.marker)
    ]


# ============================================================
# Conflict Resolution
# ============================================================

class ConflictResolver:
    """
    Decide what to do with an occupied destination.

    Fixed policies apply to every conflict. The prompt policy asks per
    destination until the user picks an "all" answer, which then sticks for
    the rest of the run.
    """

    def __init__(self, policy: LinkPolicy, ask: Callable[[str], str] = input):
        self.policy = policy
        self.ask = ask

    def resolve(self, operation: LinkOperation) -> LinkPolicy:
        if self.policy != LinkPolicy.PROMPT:
            return self.policy

        question = (
            f"Destination already exists: {operation.destination_path} ({operation.source_name})\n"
            "[s]kip, [S]kip all, [o]verwrite, [O]verwrite all, [b]ackup, [B]ackup all? "
        )
        while True:
            try:
                answer = self.ask(question).strip()
            except EOFError:
                raise SetupError(f"No answer for {operation.destination_path} (input closed)") from None
            if answer in PROMPT_CHOICES:
                policy, remember = PROMPT_CHOICES[answer]
                if remember:
                    self.policy = policy
                return policy
            print_info(f"Unknown answer '{answer}'")


# ============================================================
# Symlinks
# ============================================================

def apply_link_operation(config: Config, operation: LinkOperation, resolver: ConflictResolver | None = None) -> LinkResult:
    """
    Establish the link for one operation.

    Filesystem errors propagate to the caller and abort the run.
    """
    destination = operation.destination_path

    # Keep a link that already points at this source
    if is_linked_to_source(operation):
        return LinkResult(operation=operation, status=LinkStatus.ALREADY_EXISTS)

    # Destination is free
    if not is_occupied(destination):
        return create_link(config, operation)

    # Destination is occupied by a file, directory, or stale link
    resolver = resolver or ConflictResolver(config.link_policy)
    policy = resolver.resolve(operation)

    if policy == LinkPolicy.SKIP:
        return LinkResult(operation=operation, status=LinkStatus.SKIPPED_EXISTING)
    if policy == LinkPolicy.BACKUP:
        return backup_and_link(config, operation)
    return replace_link(config, operation)


def create_link(config: Config, operation: LinkOperation) -> LinkResult:
    """Create a new link, including missing parent directories."""
    if config.dryrun:
        return LinkResult(operation=operation, status=LinkStatus.CREATED_DRYRUN)

    operation.destination_path.parent.mkdir(parents=True, exist_ok=True)
    operation.destination_path.symlink_to(operation.source_path)
    return LinkResult(operation=operation, status=LinkStatus.CREATED)


def replace_link(config: Config, operation: LinkOperation) -> LinkResult:
    """Remove whatever occupies the destination and link in its place."""
    if config.dryrun:
        return LinkResult(operation=operation, status=LinkStatus.REPLACED_DRYRUN)

    remove_path(operation.destination_path)
    operation.destination_path.symlink_to(operation.source_path)
    return LinkResult(operation=operation, status=LinkStatus.REPLACED)


def backup_and_link(config: Config, operation: LinkOperation) -> LinkResult:
    """Move the existing destination aside and link in its place."""
    backup_path = next_backup_path(operation.destination_path)

    if config.dryrun:
        return LinkResult(operation=operation, status=LinkStatus.BACKED_UP_DRYRUN, backup_path=backup_path)

    operation.destination_path.rename(backup_path)
    operation.destination_path.symlink_to(operation.source_path)
    return LinkResult(operation=operation, status=LinkStatus.BACKED_UP, backup_path=backup_path)


# ============================================================
# Supporting Code
# ============================================================

def is_occupied(path: Path) -> bool:
    """Check for any object at path, including broken symlinks."""
    return path.is_symlink() or path.exists()


def is_linked_to_source(operation: LinkOperation) -> bool:
    """Check if the destination is a symlink resolving to the source."""
    destination = operation.destination_path
    if not destination.is_symlink():
        return False
    return destination.resolve() == operation.source_path.resolve()


def remove_path(path: Path) -> None:
    """Remove a file, symlink, or directory tree."""
    if path.is_symlink() or not path.is_dir():
        path.unlink()
    else:
        shutil.rmtree(path)


def next_backup_path(path: Path) -> Path:
    """Return the first unused ``<name>.backup[.N]`` sibling of path."""
    candidate = path.with_name(f"{path.name}.backup")
    index = 1
    while is_occupied(candidate):
        candidate = path.with_name(f"{path.name}.backup.{index}")
        index += 1
    return candidate


def print_link_result(result: LinkResult) -> None:
    """Print formatted result for a link operation."""
    destination = str(result.destination_path)

    if result.status == LinkStatus.ALREADY_EXISTS:
        print_link_status(result.source_name, result.status.value, Color.GRAY, destination, monochrome=True)
    elif result.status == LinkStatus.SKIPPED_EXISTING:
        print_link_status(result.source_name, result.status.value, Color.YELLOW, destination)
    elif result.status in (LinkStatus.BACKED_UP, LinkStatus.BACKED_UP_DRYRUN):
        print_link_status(result.source_name, result.status.value, Color.YELLOW, f"{destination} (previous: {result.backup_path})")
    else:
        print_link_status(result.source_name, result.status.value, Color.GREEN, destination)
