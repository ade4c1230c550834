"""Pytest configuration shared by the test suite."""

import sys
from pathlib import Path

# Make ``tests`` and the ``src`` layout importable when running ``pytest``
# from a checkout without installing the package.
_project_root = Path(__file__).resolve().parent
for _path in (str(_project_root), str(_project_root / "src")):
    if _path not in sys.path:
        sys.path.insert(0, _path)
