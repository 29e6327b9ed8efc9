"""Closed choices accepted on the command line.

Each choice is parsed from a handful of aliases through a static lookup table.
"""

from enum import Enum


class _AliasedChoice(Enum):
    """Enum whose members can be parsed from any of several spellings."""

    @classmethod
    def _aliases(cls) -> dict[str, "_AliasedChoice"]:
        raise NotImplementedError

    @classmethod
    def parse(cls, text: str) -> "_AliasedChoice":
        """Parse an alias string into a member.

        Args:
            text: One of the accepted spellings.

        Returns:
            The matching member.

        Raises:
            ValueError: If the spelling is not recognised.
        """
        if isinstance(text, cls):
            return text
        aliases = cls._aliases()
        if text not in aliases:
            raise ValueError(
                f"Invalid {cls._label()}: {text}. "
                f"Available: {list(aliases.keys())}"
            )
        return aliases[text]

    @classmethod
    def _label(cls) -> str:
        return cls.__name__.lower()

    def __str__(self) -> str:
        return self.value


class Evidence(_AliasedChoice):
    """Whether evidence supporting the hypothesis was observed."""

    OBSERVED = "Observed"
    NOT_OBSERVED = "NotObserved"

    @classmethod
    def _aliases(cls) -> dict[str, "Evidence"]:
        return _EVIDENCE_ALIASES

    @property
    def label(self) -> str:
        """Lower-case label used in reports."""
        return "observed" if self is Evidence.OBSERVED else "not observed"


class UpdateHypothesis(_AliasedChoice):
    """Whether the posterior should be saved as the hypothesis's new prior."""

    UPDATE = "Update"
    NO_UPDATE = "NoUpdate"

    @classmethod
    def _aliases(cls) -> dict[str, "UpdateHypothesis"]:
        return _UPDATE_ALIASES

    @classmethod
    def _label(cls) -> str:
        return "update hypothesis"


class OutputFormat(_AliasedChoice):
    """How a computed posterior is presented."""

    TABLE = "Table"
    JSON = "Json"
    PLAIN = "Plain"

    @classmethod
    def _aliases(cls) -> dict[str, "OutputFormat"]:
        return _OUTPUT_ALIASES

    @classmethod
    def _label(cls) -> str:
        return "output format"


_EVIDENCE_ALIASES = {
    "o": Evidence.OBSERVED,
    "observed": Evidence.OBSERVED,
    "Observed": Evidence.OBSERVED,
    "n": Evidence.NOT_OBSERVED,
    "not-observed": Evidence.NOT_OBSERVED,
    "NotObserved": Evidence.NOT_OBSERVED,
}

_UPDATE_ALIASES = {
    "u": UpdateHypothesis.UPDATE,
    "update": UpdateHypothesis.UPDATE,
    "Update": UpdateHypothesis.UPDATE,
    "n": UpdateHypothesis.NO_UPDATE,
    "no-update": UpdateHypothesis.NO_UPDATE,
    "NoUpdate": UpdateHypothesis.NO_UPDATE,
}

_OUTPUT_ALIASES = {
    "t": OutputFormat.TABLE,
    "table": OutputFormat.TABLE,
    "Table": OutputFormat.TABLE,
    "j": OutputFormat.JSON,
    "json": OutputFormat.JSON,
    "Json": OutputFormat.JSON,
    "JSON": OutputFormat.JSON,
    "p": OutputFormat.PLAIN,
    "plain": OutputFormat.PLAIN,
    "Plain": OutputFormat.PLAIN,
}
