"""Allow ``python -m autocondense``."""

import sys

from autocondense.ui.cli.cli import main

if __name__ == "__main__":
    sys.exit(main())
