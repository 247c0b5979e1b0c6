# src/sitecheck_shell/app.py
from __future__ import annotations

import logging
import sys

from sitecheck_shell.core.handlers.check_handler import handle_check

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Entrypoint for running the checks from the command line."""
    args = sys.argv[1:] if argv is None else argv
    try:
        return handle_check(args)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 130
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        print(f"\nFATAL: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
