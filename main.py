#!/usr/bin/env python3
from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent
sys.path.append(str(ROOT / "src"))

from dentdirectory.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
