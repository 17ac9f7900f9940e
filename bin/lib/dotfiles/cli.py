"""Machine bootstrap entry point.

Sets up a new macOS install from the dotfiles repository.
"""

import argparse
import subprocess
import sys

from .config import Config
from .models import LinkPolicy
from .orchestrator import STEPS, list_steps, run_steps, select_steps
from .output import print_error, print_info


# --------------------------------------------------------------------------- #
# Arguments
# --------------------------------------------------------------------------- #

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dotfiles-init",
        description="Setup a new macOS install from the dotfiles repository.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Steps run in registry order; see --list. Default steps come from
dotfiles.toml ("steps") and are marked with *.

Environment:
  TRACE=1        echo every external command before it runs
  DOTFILES_ROOT  repository root (default: git top-level of the cwd)
        """
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="print actions without executing them")
    parser.add_argument("--only", action="append", metavar="STEP",
                        choices=[step.name for step in STEPS],
                        help="run only this step (repeatable)")
    parser.add_argument("--list", action="store_true",
                        help="list available steps and exit")
    parser.add_argument("--link-policy", choices=[policy.value for policy in LinkPolicy],
                        help="how to treat existing files at link destinations")
    return parser


# --------------------------------------------------------------------------- #
# Main
# --------------------------------------------------------------------------- #

def main(argv: list[str] | None = None) -> None:
    """Parse arguments and run the selected setup steps."""
    args = build_parser().parse_args(argv)

    try:
        # Initialize configuration
        config = Config()
        config.dryrun = args.dry_run
        if args.link_policy:
            config.link_policy = LinkPolicy.from_value(args.link_policy)

        if args.list:
            list_steps(config)
            return

        run_steps(config, select_steps(args.only or config.default_steps))
    except subprocess.CalledProcessError as e:
        print_error(f"Command failed with exit status {e.returncode}: {e.cmd}")
        sys.exit(e.returncode)
    except KeyboardInterrupt:
        print_info("\nInterrupted")
        sys.exit(130)
    except Exception as e:
        print_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
