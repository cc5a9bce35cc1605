"""Allow ``python -m paged_menu``."""

import sys

from .cli import main

sys.exit(main())
