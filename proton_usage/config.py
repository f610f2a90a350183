"""
Configuration - Steam home detection and runtime settings.

Values come from the defaults below, then from the environment (a ``.env``
file is loaded first), and finally from command line flags.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from proton_usage.core.errors import SteamHomeNotFoundError

logger = logging.getLogger("protonusage.config")


__all__ = ["Config", "config"]

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass
class Config:
    """
    Central configuration handling for the application.
    Manages the Steam home path and the remote name lookup settings.
    """

    STEAM_PATH: Path | None = None

    # Remote name lookup (Steam Store)
    FETCH_NAMES: bool = False
    REQUEST_TIMEOUT: float = 10.0
    MAX_CONCURRENT_REQUESTS: int = 10

    LOG_FILE: Path | None = None

    def __post_init__(self):
        """Load environment overrides after instantiation."""
        load_dotenv()
        self._load_environment()

    def _load_environment(self) -> None:
        """Apply PROTON_USAGE_* environment variables."""
        steam_path = os.getenv("PROTON_USAGE_STEAM_PATH")
        if steam_path:
            self.STEAM_PATH = Path(steam_path).expanduser()

        fetch_names = os.getenv("PROTON_USAGE_FETCH_NAMES")
        if fetch_names:
            self.FETCH_NAMES = fetch_names.strip().lower() in _TRUE_VALUES

        timeout = os.getenv("PROTON_USAGE_REQUEST_TIMEOUT")
        if timeout:
            try:
                self.REQUEST_TIMEOUT = float(timeout)
            except ValueError:
                logger.warning("Ignoring invalid PROTON_USAGE_REQUEST_TIMEOUT: %s", timeout)

        log_file = os.getenv("PROTON_USAGE_LOG_FILE")
        if log_file:
            self.LOG_FILE = Path(log_file).expanduser()

    @staticmethod
    def _find_steam_path() -> Path | None:
        """Default Steam home on Linux (~/.steam)."""
        try:
            return Path.home() / ".steam"
        except RuntimeError:
            return None

    def get_steam_home(self, override: Path | None = None) -> Path:
        """Determine the Steam home directory to read from.

        Args:
            override: Path given on the command line; wins over everything.

        Returns:
            An existing Steam home directory.

        Raises:
            SteamHomeNotFoundError: If no directory can be determined or it
                does not exist.
        """
        steam_path = override or self.STEAM_PATH or self._find_steam_path()
        if steam_path is None:
            raise SteamHomeNotFoundError()
        if not steam_path.is_dir():
            raise SteamHomeNotFoundError(steam_path)
        return steam_path


# Global instance
config = Config()
