# src/sitecheck_shell/core/utils/path_utils.py
import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class PathUtils:
    """
    A central utility for reliably retrieving package and site paths.
    """

    # --- Package specific paths

    @staticmethod
    def get_shell_package_root() -> Path:
        """Returns the directory of the sitecheck_shell package (where settings.json lives)."""
        return Path(__file__).resolve().parents[2]

    @staticmethod
    def get_settings_file() -> Path:
        return PathUtils.get_shell_package_root() / "settings.json"

    # --- Site specific paths ---

    @staticmethod
    def get_site_root(root: Optional[str] = None) -> Path:
        """
        Returns the root directory of the site being checked.
        Defaults to the current working directory.
        """
        return Path(root).expanduser().resolve() if root else Path.cwd()

    @staticmethod
    def resolve_in_site(site_root: Path, path: str) -> Path:
        """Resolves a (possibly relative) path against the site root. Absolute paths are kept."""
        candidate = Path(path).expanduser()
        return candidate if candidate.is_absolute() else site_root / candidate
