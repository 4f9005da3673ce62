#!/usr/bin/env python3
"""
CLI: generate every still, loop and transition for a palette x resolution matrix.
Usage:
  python scripts/generate.py -c config/colors.yaml -r config/resolutions.yaml
  python scripts/generate.py -c config/colors.yaml -r config/resolutions.yaml -o output --dry-run
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from colorloops.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
