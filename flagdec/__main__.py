"""Allow ``python -m flagdec``."""

from __future__ import annotations

import sys

from flagdec.main import main

if __name__ == "__main__":
    sys.exit(main())
