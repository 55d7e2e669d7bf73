"""Test package with a stable import root."""

import sys
from pathlib import Path

# The library is a set of top-level modules; make the repository root importable.
_ROOT = str(Path(__file__).resolve().parents[1])
if _ROOT not in sys.path:
    sys.path.insert(0, _ROOT)
