"""Allow ``python -m mp3repair``."""

import sys

from mp3repair.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
