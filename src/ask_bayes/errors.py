"""Exceptions raised by ask-bayes."""

from typing import Any, Optional


class AskBayesError(Exception):
    """Base class for all errors reported to the user."""


class InvalidProbability(AskBayesError, ValueError):
    """Raised when a probability is not a number in [0, 1]."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Probability must be between 0 and 1 (got {value!r})")


class ZeroMarginalProbability(AskBayesError):
    """Raised when the denominator of Bayes' rule is not positive.

    The message carries the full expansion of P(E) or P(¬E) with the
    substituted values so the user can see which term vanished.
    """

    def __init__(
        self,
        message: str,
        name: str,
        prior: float,
        likelihood: float,
        likelihood_not: float,
        evidence: Any,
    ):
        self.name = name
        self.prior = prior
        self.likelihood = likelihood
        self.likelihood_not = likelihood_not
        self.evidence = evidence
        super().__init__(message)


class HypothesisNotFound(AskBayesError, KeyError):
    """Raised when the prior store has no record for a hypothesis."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Could not find hypothesis {name}")

    def __str__(self) -> str:
        return self.args[0]


class StoreUnavailable(AskBayesError):
    """Raised when the prior store cannot be opened."""


class MalformedStoredValue(AskBayesError):
    """Raised when a stored prior is not an 8-byte big-endian probability."""

    def __init__(self, name: str, size: int, value: Optional[float] = None):
        self.name = name
        self.size = size
        self.value = value
        if value is None:
            detail = f"expected 8 bytes, found {size}"
        else:
            detail = f"{value} is not a probability"
        super().__init__(f"Stored prior for hypothesis {name} is corrupted ({detail})")


class ConflictingOptions(AskBayesError):
    """Raised when command-line flags cannot be resolved to one operation."""
