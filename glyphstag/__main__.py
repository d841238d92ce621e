"""Allows ``python -m glyphstag``."""

import sys

from .cli import main

sys.exit(main())
