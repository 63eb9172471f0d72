"""Entry point for ``python -m mfcompiler``."""

import sys

from mfcompiler.cli import main

sys.exit(main())
