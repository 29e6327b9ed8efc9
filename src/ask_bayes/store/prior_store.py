"""SQLite-based storage for hypothesis priors.

Each hypothesis name maps to a single probability stored as the 8-byte
big-endian IEEE-754 encoding of the float.
"""

import math
import sqlite3
import struct
from pathlib import Path

from ask_bayes.bayes import validate_probability
from ask_bayes.errors import HypothesisNotFound, MalformedStoredValue, StoreUnavailable
from ask_bayes.log import get_logger
from ask_bayes.utils import default_db_path, resolve_path

logger = get_logger(__name__)

_PRIOR_FORMAT = ">d"
_PRIOR_SIZE = struct.calcsize(_PRIOR_FORMAT)

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS priors (
    name  TEXT PRIMARY KEY,
    value BLOB NOT NULL
)
"""


def encode_prior(value: float) -> bytes:
    """Encode a prior as 8 big-endian bytes."""
    return struct.pack(_PRIOR_FORMAT, value)


def decode_prior(name: str, raw: bytes) -> float:
    """Decode 8 big-endian bytes into a prior.

    Raises:
        MalformedStoredValue: If ``raw`` is not exactly 8 bytes, or does not
            hold a probability in [0, 1].
    """
    if len(raw) != _PRIOR_SIZE:
        raise MalformedStoredValue(name, len(raw))
    value = struct.unpack(_PRIOR_FORMAT, raw)[0]
    if math.isnan(value) or not 0.0 <= value <= 1.0:
        raise MalformedStoredValue(name, len(raw), value)
    return value


class SQLitePriorStore:
    """SQLite store of hypothesis priors.

    Use ``":memory:"`` as the path for an ephemeral database.
    """

    def __init__(self, db_path: str | Path | None = None):
        """Open the store, creating the database file if needed.

        Args:
            db_path: Path to the SQLite database file. Defaults to
                ``~/.ask-bayes/hypotheses.db``.

        Raises:
            StoreUnavailable: If the database cannot be opened.
        """
        if db_path is None:
            db_path = default_db_path()
        if str(db_path) == ":memory:":
            self.db_path = ":memory:"
        else:
            path = resolve_path(db_path)
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreUnavailable(f"Could not create {path.parent}: {e}") from e
            self.db_path = str(path)

        self._conn: sqlite3.Connection | None = None
        self._init_db()

    def _init_db(self) -> None:
        """Initialize the database schema."""
        logger.debug("Opening prior store at %s", self.db_path)
        try:
            self._conn = sqlite3.connect(self.db_path)
            self._conn.execute(_CREATE_TABLE_SQL)
            self._conn.commit()
        except sqlite3.Error as e:
            self.close()
            raise StoreUnavailable(f"Could not open database {self.db_path}: {e}") from e

    def _execute(self, sql: str, params: tuple = (), commit: bool = False) -> sqlite3.Cursor:
        if self._conn is None:
            raise StoreUnavailable("Prior store is closed")
        try:
            cursor = self._conn.execute(sql, params)
            if commit:
                self._conn.commit()
        except sqlite3.Error as e:
            raise StoreUnavailable(f"Database error in {self.db_path}: {e}") from e
        return cursor

    def get_prior(self, name: str) -> float:
        """Return the saved prior P(H) of a hypothesis.

        Raises:
            HypothesisNotFound: If no prior is saved under ``name``.
            MalformedStoredValue: If the saved bytes are not a valid float.
        """
        row = self._execute(
            "SELECT value FROM priors WHERE name = ?",
            (name,),
        ).fetchone()

        if row is None:
            raise HypothesisNotFound(name)
        return decode_prior(name, bytes(row[0]))

    def set_prior(self, name: str, value: float) -> float:
        """Save ``value`` as the prior of a hypothesis, replacing any old one.

        Returns:
            The validated prior that was saved.

        Raises:
            InvalidProbability: If ``value`` is not in [0, 1].
        """
        prior = validate_probability(value)
        self._execute(
            "INSERT OR REPLACE INTO priors (name, value) VALUES (?, ?)",
            (name, encode_prior(prior)),
            commit=True,
        )
        logger.debug("Saved P(%s) = %s", name, prior)
        return prior

    def remove_prior(self, name: str) -> None:
        """Remove the prior of a hypothesis. Removing a missing name is a no-op."""
        self._execute("DELETE FROM priors WHERE name = ?", (name,), commit=True)
        logger.debug("Removed P(%s)", name)

    def list_names(self) -> list[str]:
        """Names of all hypotheses with a saved prior, sorted."""
        rows = self._execute("SELECT name FROM priors ORDER BY name").fetchall()
        return [row[0] for row in rows]

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "SQLitePriorStore":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


def get_prior(name: str, db_path: str | Path | None = None) -> float:
    """Open the store, read the prior of ``name`` and close it again."""
    with SQLitePriorStore(db_path) as store:
        return store.get_prior(name)


def set_prior(name: str, value: float, db_path: str | Path | None = None) -> float:
    """Open the store, save the prior of ``name`` and close it again."""
    with SQLitePriorStore(db_path) as store:
        return store.set_prior(name, value)


def remove_prior(name: str, db_path: str | Path | None = None) -> None:
    """Open the store, remove the prior of ``name`` and close it again."""
    with SQLitePriorStore(db_path) as store:
        store.remove_prior(name)
