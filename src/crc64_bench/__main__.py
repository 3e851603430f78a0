"""Allow ``python -m crc64_bench``."""

import sys

from .cli import main

sys.exit(main())
