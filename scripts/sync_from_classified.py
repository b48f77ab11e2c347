#!/usr/bin/env python3
"""Script to sync the overall chart from the Classified repository into README.md.

Usage:
    python scripts/sync_from_classified.py          # sync, write and commit
    python scripts/sync_from_classified.py --safe   # check only, change nothing
"""

import sys
import os

# Add the project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from chart_sync.cli import main


if __name__ == "__main__":
    sys.exit(main())
