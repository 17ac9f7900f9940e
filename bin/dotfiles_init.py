#!/usr/bin/env python3
"""Setup a new macOS install from the dotfiles repository.

Runs without installation: ./bin/dotfiles_init.py [--help]
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "lib"))
from dotfiles.cli import main


if __name__ == "__main__":
    main()
