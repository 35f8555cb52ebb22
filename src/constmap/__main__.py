"""
Entry point for module execution (``python -m constmap``).

This module delegates execution to the CLI handler in ``constmap.cli.__main__``.
"""

import sys
from constmap.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
