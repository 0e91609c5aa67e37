"""
Dashboard Configuration

Loads the data base path and runtime settings from environment variables
or a .env file at the project root.
"""

from __future__ import annotations

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigError

logger = logging.getLogger("bda.config")

PROJECT_ROOT = Path(__file__).resolve().parent.parent

LAYOUT_VARIANTS = ("all", "sample")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_env_file(env_path: Optional[str] = None) -> None:
    """
    Load environment variables from a .env file.

    Existing environment variables are never overridden.
    """
    if env_path is None:
        path = PROJECT_ROOT / ".env"
    else:
        path = Path(env_path)

    if not path.exists():
        logger.debug(f"No .env file found at {path}")
        return

    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#"):
                    continue
                if "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip().strip('"').strip("'")
                    if key not in os.environ:
                        os.environ[key] = value
        logger.info(f"Loaded environment from {path}")
    except OSError as e:
        logger.warning(f"Failed to load .env file: {e}")


@dataclass
class DashboardConfig:
    """
    Runtime configuration.

    Usage:
        config = DashboardConfig.from_env()
        loader = Loader(store, config)
    """
    data_base_path: str = "data"
    layouts_variant: str = "all"
    fetch_timeout: float = 15.0
    log_level: str = "INFO"
    default_section: str = "overview"

    def __post_init__(self):
        if self.layouts_variant not in LAYOUT_VARIANTS:
            raise ConfigError(
                f"Unknown layouts variant '{self.layouts_variant}' "
                f"(expected one of {', '.join(LAYOUT_VARIANTS)})"
            )
        if self.fetch_timeout <= 0:
            raise ConfigError(f"fetch_timeout must be positive, got {self.fetch_timeout}")

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "DashboardConfig":
        """Load configuration from environment."""
        load_env_file(env_path)
        try:
            timeout = float(os.getenv("BDA_FETCH_TIMEOUT", "15"))
        except ValueError as e:
            raise ConfigError(f"BDA_FETCH_TIMEOUT is not a number: {e}") from e
        return cls(
            data_base_path=os.getenv("BDA_DATA_BASE_PATH", "data"),
            layouts_variant=os.getenv("BDA_LAYOUTS_VARIANT", "all").strip().lower(),
            fetch_timeout=timeout,
            log_level=os.getenv("BDA_LOG_LEVEL", "INFO").upper(),
            default_section=os.getenv("BDA_DEFAULT_SECTION", "overview"),
        )

    @property
    def is_remote(self) -> bool:
        """True when the base path is an http(s) URL."""
        return self.data_base_path.startswith(("http://", "https://"))


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once per process."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
