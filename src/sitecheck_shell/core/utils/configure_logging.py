# src/sitecheck_shell/core/utils/configure_logging.py
import logging
import sys
from typing import Dict, Optional, Union

from tqdm import tqdm

Level = Union[str, int]

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s:%(lineno)d] - %(message)s"


class LogWithTqdm(logging.Handler):
    """
    Sends log records through `tqdm.write()` on stderr, so they never break the
    notes progress bar and never end up in the report on stdout.
    """
    def emit(self, record):
        try:
            tqdm.write(self.format(record), file=sys.stderr)
        except Exception:
            self.handleError(record)


def to_level(level: Optional[Level], default: int = logging.WARNING) -> int:
    """Turns 'info' / 'INFO' / 20 into a logging level; unknown names fall back to default."""
    if isinstance(level, int):
        return level
    if not level:
        return default
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else default


def configure_logger(level: Optional[Level] = "WARNING", module_levels: Optional[Dict[str, Level]] = None) -> None:
    """
    Installs the tqdm-aware handler on the root logger.

    Args:
        level: Root level, from 'debug.level' or --log-level.
        module_levels: Per-logger overrides, from the 'debug.modules' map in settings.json.
            Python warnings (e.g. from BeautifulSoup) arrive on the 'py.warnings' logger.
    """
    handler = LogWithTqdm()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(to_level(level))

    logging.captureWarnings(True)

    for name, module_level in (module_levels or {}).items():
        logging.getLogger(name).setLevel(to_level(module_level))
