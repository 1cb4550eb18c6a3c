"""Run the Gemini CLI test suite from a single entrypoint.

    python tests/main.py [pytest args]
"""
import sys
from pathlib import Path

import pytest


def main(argv=None):
    """Run pytest over this folder unless other arguments are given."""
    if not argv:
        argv = ["-v", str(Path(__file__).parent)]
    return pytest.main(argv)


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
