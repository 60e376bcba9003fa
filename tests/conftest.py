import sys
from pathlib import Path


# Make hitting_analyzer and the shared test helpers importable without installing the package.
TESTS = Path(__file__).resolve().parent
ROOT = TESTS.parent
for path in (ROOT, TESTS):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))
