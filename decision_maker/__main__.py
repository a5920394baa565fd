from __future__ import annotations

import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Ensure the repository root (parent of this package) is on ``sys.path``.

    When this module is executed as a script (``python decision_maker/__main__.py``)
    the package is not importable by name; inserting the parent directory of the
    package fixes that.
    """
    pkg_dir = Path(__file__).resolve().parent
    repo_root_str = str(pkg_dir.parent)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


try:
    # Works when executed as a module: python -m decision_maker
    from .app import run  # type: ignore[attr-defined]
    from .logging_config import configure_logging  # type: ignore[attr-defined]
except ImportError:
    # Works when executed as a script (IDE "Run Python File", absolute path, etc.)
    _ensure_repo_root_on_path()
    from decision_maker.app import run  # type: ignore[attr-defined]
    from decision_maker.logging_config import configure_logging  # type: ignore[attr-defined]


def main() -> int:
    """Entry point for running the decision maker from the command line."""
    logger = configure_logging()
    try:
        return run()
    except OSError as exc:
        # The terminal has already been restored by the time we get here.
        logger.error("terminal I/O failed: %s", exc)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
