from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
PACKAGE_ROOT = REPO_ROOT / "src" / "registration_portal"


def ensure_import_paths() -> None:
    """Make `config` and `registration_portal` importable without `pip install -e .`."""

    for path in (REPO_ROOT, PACKAGE_ROOT):
        if str(path) not in sys.path:
            sys.path.insert(0, str(path))
