"""Allow `python -m doccluster` as an alternative entry point."""

import sys

from doccluster.cli import main

if __name__ == "__main__":
    sys.exit(main())
