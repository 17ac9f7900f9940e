"""Git step — render the git identity into gitconfig."""

# ============================================================
# Imports
# ============================================================

from pathlib import Path

from .config import Config
from .models import SetupError
from .output import print_info, print_success, print_warning
from .shell import prompt


TEMPLATE_NAME = "gitconfig.template"


# ============================================================
# Entry Point
# ============================================================

def setup_git(config: Config) -> None:
    """
    Write git/gitconfig<marker> from the template.

    Author name and email come from dotfiles.toml or are asked for. Must run
    before the symlink step so the rendered file gets linked.

    Raises:
        SetupError: If the name or email is empty
    """
    template_path = config.repo_path("git", TEMPLATE_NAME)
    if not template_path.exists():
        print_warning(f"Skipping git identity ({template_path} not found)")
        return

    output_path = template_path.with_name(f"gitconfig{config.marker}")

    # Dry run skips the identity prompts
    if config.dryrun and not (config.git_author_name and config.git_author_email):
        print_info(f"Would ask for the git identity and write {output_path.relative_to(config.repo_root)}")
        return

    author_name = config.git_author_name or prompt("github author name")
    author_email = config.git_author_email or prompt("github author email (<username>@users.noreply.github.com)")

    write_gitconfig(config, template_path, output_path, author_name, author_email)


# ============================================================
# Rendering
# ============================================================

def render_gitconfig(template: str, author_name: str, author_email: str) -> str:
    """
    Substitute the author placeholders in a gitconfig template.

    Raises:
        SetupError: If the name or email is empty
    """
    if not author_name:
        raise SetupError("Git author name not provided")
    if not author_email:
        raise SetupError("Git author email not provided")

    return template.replace("{AUTHOR_NAME}", author_name).replace("{AUTHOR_EMAIL}", author_email)


def write_gitconfig(config: Config, template_path: Path, output_path: Path, author_name: str, author_email: str) -> None:
    """Render the template and write it next to it."""
    content = render_gitconfig(template_path.read_text(), author_name, author_email)

    if not config.dryrun:
        output_path.write_text(content)

    print_success(f"Git identity written to {output_path.relative_to(config.repo_root)}")
