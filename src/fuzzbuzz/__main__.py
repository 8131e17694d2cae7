"""Entry point for ``python -m fuzzbuzz``."""

import sys

from fuzzbuzz.cli import main

sys.exit(main())
