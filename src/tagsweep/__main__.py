"""Entry point for ``python -m tagsweep``."""

import sys

from tagsweep.ui.cli import main

if __name__ == "__main__":
    sys.exit(main())
