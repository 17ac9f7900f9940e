"""macOS step — developer directory and system defaults."""

# ============================================================
# Imports
# ============================================================

from .config import Config
from .models import SetupError
from .output import print_info, print_success
from .shell import prompt, run


REPOSITORIES_LINK_NAME = "Repos"
DRYRUN_DISK_NAME = "<disk>"


# ============================================================
# Entry Point
# ============================================================

def setup_macos(config: Config) -> None:
    """
    Prepare the macOS user environment.

    Steps:
    1. Create ~/Developer
    2. Apply system defaults from macos/defaults.sh
    3. Add a case-sensitive repositories volume, if configured
    """
    create_developer_directory(config)
    apply_system_defaults(config)

    if config.repositories_volume:
        create_repositories_volume(config, config.repositories_volume)


# ============================================================
# Directories
# ============================================================

def create_developer_directory(config: Config) -> None:
    """Create ~/Developer if missing."""
    developer_dir = config.home / "Developer"
    if developer_dir.is_dir():
        return

    if not config.dryrun:
        developer_dir.mkdir(parents=True, exist_ok=True)
    print_success(f"Created {developer_dir}")


# ============================================================
# Defaults
# ============================================================

def apply_system_defaults(config: Config) -> None:
    """Run the defaults script shipped in the repository."""
    defaults_script = config.repo_path("macos", "defaults.sh")
    if not defaults_script.exists():
        print_info("No macos/defaults.sh, skipping system defaults")
        return

    run(config, ["/bin/bash", str(defaults_script)], cwd=defaults_script.parent)
    print_success("System defaults applied")


# ============================================================
# Repositories Volume
# ============================================================

def create_repositories_volume(config: Config, volume_name: str) -> None:
    """
    Add a case-sensitive APFS volume and link ~/Repos to it.

    Raises:
        SetupError: If no disk name is entered
    """
    volume_path = config.volumes_root / volume_name
    link_path = config.home / REPOSITORIES_LINK_NAME

    if volume_path.is_dir():
        print_info("Repositories volume already exists")
        return

    # Let the user pick the container disk
    run(config, ["diskutil", "list"])
    if config.dryrun:
        disk_name = DRYRUN_DISK_NAME
    else:
        disk_name = prompt("which disk should the volume be added to?")
    if not disk_name:
        raise SetupError("Disk name not provided")

    run(config, ["diskutil", "apfs", "addVolume", disk_name, "Case-sensitive APFS", volume_name, "-passprompt"])

    if not link_path.is_symlink() and not config.dryrun:
        link_path.symlink_to(volume_path)

    print_success(f"Repositories volume available at {link_path}")
