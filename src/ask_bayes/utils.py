"""Utility functions for ask-bayes."""

import os
from pathlib import Path

from dotenv import load_dotenv

from ask_bayes.errors import StoreUnavailable

APP_DIR_NAME = ".ask-bayes"
DB_FILE_NAME = "hypotheses.db"
CONFIG_FILE_NAME = "config.yaml"


def setup_environment() -> None:
    """Load environment variables from .env file."""
    load_dotenv()


def app_dir() -> Path:
    """Per-user directory holding the database and config file.

    Returns:
        ``~/.ask-bayes``.

    Raises:
        StoreUnavailable: If the home directory cannot be determined.
    """
    try:
        home = Path.home()
    except RuntimeError as e:
        raise StoreUnavailable("Could not find home directory") from e
    return home / APP_DIR_NAME


def default_db_path() -> Path:
    """Default location of the hypotheses database.

    ``ASK_BAYES_DB`` overrides ``~/.ask-bayes/hypotheses.db``.
    """
    override = os.environ.get("ASK_BAYES_DB")
    if override:
        return Path(override)
    return app_dir() / DB_FILE_NAME


def resolve_path(path: str | Path) -> Path:
    """Expand ``~`` in a path, failing if no home directory is available.

    Raises:
        StoreUnavailable: If ``~`` cannot be expanded.
    """
    try:
        expanded = Path(path).expanduser()
    except RuntimeError as e:
        raise StoreUnavailable(f"Could not find home directory to resolve {path}") from e
    if str(expanded).startswith("~"):
        raise StoreUnavailable(f"Could not find home directory to resolve {path}")
    return expanded
