"""Entrypoint: build, estimate or inspect routing for a business website."""

from __future__ import annotations

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent / "src"))

from siteforge.cli import main


if __name__ == "__main__":
    main()
