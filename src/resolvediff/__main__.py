"""Allow running as ``python -m resolvediff``."""

import sys

from resolvediff.cli import main

sys.exit(main())
