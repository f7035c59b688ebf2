"""
Configuration management for Filed Recipes.

This module centralizes environment variable loading from the .env file at the
project root. It is imported by the repository and the console entry point so
.env is loaded before any setting is read.

When no .env exists, load_dotenv() is a no-op and the process environment is
used as is.

Environment Variables:
- FILED_RECIPES_PATH: Optional, recipe file location (default: "App_Data/Recipes.txt")
- FILED_RECIPES_ENCODING: Optional, recipe file encoding (default: "utf-8")
- FILED_RECIPES_LOG_LEVEL: Optional, logging level name (default: "INFO")
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_RECIPES_PATH = "App_Data/Recipes.txt"
DEFAULT_ENCODING = "utf-8"
DEFAULT_LOG_LEVEL = "INFO"


def load_env_file() -> None:
    """
    Load environment variables from .env at the project root.

    The project root is found by going up from this file
    (filed_recipes/config.py -> filed_recipes/ -> project root). Existing
    environment variables take precedence over values in the file.

    Safe to call multiple times.
    """
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env", override=False)


load_env_file()


class RecipesConfig:
    """Settings for the recipe file and logging."""

    @staticmethod
    def get_path() -> Path:
        """
        Get the recipe file location.

        Returns:
            Path from FILED_RECIPES_PATH, or the default App_Data/Recipes.txt
        """
        return Path(os.getenv("FILED_RECIPES_PATH", DEFAULT_RECIPES_PATH))

    @staticmethod
    def get_encoding() -> str:
        """Get the text encoding used to read and write the recipe file."""
        return os.getenv("FILED_RECIPES_ENCODING", DEFAULT_ENCODING)

    @staticmethod
    def get_log_level() -> int:
        """
        Get the logging level.

        Returns:
            Numeric level for FILED_RECIPES_LOG_LEVEL

        Raises:
            ValueError: If the variable names an unknown level
        """
        name = os.getenv("FILED_RECIPES_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level in FILED_RECIPES_LOG_LEVEL: {name!r}")
        return level


def configure_logging() -> None:
    """Configure root logging with the level from RecipesConfig."""
    logging.basicConfig(
        level=RecipesConfig.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
