"""Dotfiles bootstrap library."""

from .config import Config
from .models import (
    LinkOperation,
    LinkPolicy,
    LinkResult,
    LinkStatus,
    SetupError,
    SourceFile,
    Step,
)
from .orchestrator import STEPS, run_steps, select_steps
from .symlinks import (
    find_source_files,
    link_source_files,
    resolve_destination,
)

__all__ = [
    # Configuration
    'Config',
    # Domain models
    'LinkOperation',
    'LinkPolicy',
    'LinkResult',
    'LinkStatus',
    'SetupError',
    'SourceFile',
    'Step',
    # Orchestration
    'STEPS',
    'run_steps',
    'select_steps',
    # Symlinks
    'find_source_files',
    'link_source_files',
    'resolve_destination',
]
