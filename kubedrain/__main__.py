"""Allow ``python -m kubedrain``."""

import sys

from kubedrain.cli import main

if __name__ == "__main__":
    sys.exit(main())
