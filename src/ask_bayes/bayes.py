"""Posterior probability of a hypothesis via Bayes' theorem.

Every function here is pure: no I/O, no logging. Callers validate each input
probability with ``validate_probability`` before asking for a posterior;
``calculate_posterior`` only guards against a vanishing denominator.

Notation:
    P(H)     prior
    P(E|H)   likelihood
    P(E|¬H)  likelihood_not
    P(E)     marginal likelihood, P(H) * P(E|H) + P(¬H) * P(E|¬H)
"""

import math
from typing import Union

from ask_bayes.errors import InvalidProbability, ZeroMarginalProbability
from ask_bayes.types import Evidence

_fma = getattr(math, "fma", None)


def validate_probability(value: Union[str, float]) -> float:
    """Validate a probability. Probabilities are floats between 0 and 1.

    Args:
        value: A float, or a string holding one.

    Returns:
        The probability as a float.

    Raises:
        InvalidProbability: If the value is not a number in [0, 1].
    """
    try:
        probability = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidProbability(value) from e

    if math.isnan(probability) or not 0.0 <= probability <= 1.0:
        raise InvalidProbability(value)
    return probability


def negate(value: float) -> float:
    """Negate a probability, e.g. P(H) -> P(¬H)."""
    return 1.0 - value


def marginal_likelihood(prior: float, likelihood: float, likelihood_not: float) -> float:
    """P(E) = P(H) * P(E|H) + P(¬H) * P(E|¬H).

    Uses a fused multiply-add where the interpreter provides one.
    """
    if _fma is not None:
        return _fma(likelihood, prior, likelihood_not * negate(prior))
    return likelihood * prior + likelihood_not * negate(prior)


def validate_likelihoods_and_prior(
    prior: float,
    likelihood: float,
    likelihood_not: float,
    evidence: Evidence,
    name: str,
) -> None:
    """Check that the denominator of Bayes' rule is positive.

    For observed evidence that is P(E), otherwise P(¬E).

    Raises:
        ZeroMarginalProbability: With the expansion of the vanishing term.
    """
    p_e = marginal_likelihood(prior, likelihood, likelihood_not)

    if evidence is Evidence.OBSERVED:
        if p_e <= 0.0:
            message = (
                "The total probability of observing evidence P(E) must be "
                "greater than 0 if evidence is observed.\n"
                f"P(E) = P({name})[{prior}] * P(E|{name})[{likelihood}] + "
                f"P(¬{name})[{negate(prior)}] * P(E|¬{name})[{likelihood_not}] = 0"
            )
            raise ZeroMarginalProbability(
                message, name, prior, likelihood, likelihood_not, evidence
            )
    elif negate(p_e) <= 0.0:
        message = (
            "The total probability of not observing evidence P(¬E) must be "
            "greater than 0 if evidence is not observed.\n"
            f"P(¬E) = P(¬E|{name})[{negate(likelihood)}] * P({name})[{prior}] + "
            f"P(¬{name})[{negate(prior)}] * P(¬E|¬{name})[{negate(likelihood_not)}] = 0"
        )
        raise ZeroMarginalProbability(
            message, name, prior, likelihood, likelihood_not, evidence
        )


def calculate_posterior(
    prior: float,
    likelihood: float,
    likelihood_not: float,
    evidence: Evidence,
    name: str,
) -> float:
    """Compute P(H|E) if evidence was observed, or P(H|¬E) if it was not.

    Args:
        prior: P(H).
        likelihood: P(E|H).
        likelihood_not: P(E|¬H).
        evidence: Whether the evidence was observed.
        name: Hypothesis name, used in error messages.

    Returns:
        The posterior probability.

    Raises:
        ZeroMarginalProbability: If P(E) (or P(¬E)) is not positive.

    Examples:
        >>> calculate_posterior(0.75, 0.75, 0.5, Evidence.OBSERVED, "h")
        0.8181818181818182
        >>> calculate_posterior(0.75, 0.75, 0.5, Evidence.NOT_OBSERVED, "h")
        0.6
    """
    validate_likelihoods_and_prior(prior, likelihood, likelihood_not, evidence, name)
    p_e = marginal_likelihood(prior, likelihood, likelihood_not)

    if evidence is Evidence.OBSERVED:
        # P(H|E) = P(H) * P(E|H) / P(E)
        return likelihood * prior / p_e
    # P(H|¬E) = P(H) * P(¬E|H) / P(¬E)
    return negate(likelihood) * prior / negate(p_e)


def clamp_probability(value: float) -> float:
    """Limit a computed probability to [0, 1].

    Rounding can put a posterior one ulp outside the interval, e.g.
    ``calculate_posterior(0.1, 0.0, 1.0, Evidence.NOT_OBSERVED, "h")`` is
    ``1.0000000000000002``.
    """
    return min(1.0, max(0.0, value))
