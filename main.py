from __future__ import annotations

import sys

from roulette.cli import main

if __name__ == "__main__":
    sys.exit(main())
