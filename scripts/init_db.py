"""Standalone database initialization helper.

Equivalent to running:
    python -m mdm_init.cli init-db

Meant as the container ENTRYPOINT of the bootstrap job: waits for MongoDB,
then creates collections, indexes and sample data. Idempotent: safe to run
multiple times.
"""
from __future__ import annotations

import sys
from pathlib import Path

# Ensure the src/ directory is on sys.path when running the script directly
REPO_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = REPO_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from mdm_init.cli.main import main  # noqa: E402


def run(argv=None) -> int:
    """Run `init-db`, passing any extra arguments through as its flags."""
    extra = sys.argv[1:] if argv is None else argv
    return main(["init-db", *extra])


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(run())
