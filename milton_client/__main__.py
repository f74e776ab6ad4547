"""Allow ``python -m milton_client``."""

import sys

from .cli import main

sys.exit(main())
