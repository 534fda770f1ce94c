#!/usr/bin/env python
# ruff: noqa: E402
"""
Analyze one image with the vision service and fetch a smart-cropped thumbnail.

Usage:
  python scripts/analyze.py                      # analyzes image/building.jpg
  python scripts/analyze.py images/street.jpg
  VISION_SETTINGS_FILE=~/appsettings.json python scripts/analyze.py photo.png
"""
from __future__ import annotations

import sys
from pathlib import Path

# Ensure the repo root is on the import path when running as a script.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from photo_insight.cli import main

if __name__ == "__main__":
    sys.exit(main())
