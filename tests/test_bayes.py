"""Tests for the posterior calculator."""

import itertools

import pytest

from ask_bayes.bayes import (
    calculate_posterior,
    clamp_probability,
    marginal_likelihood,
    negate,
    validate_likelihoods_and_prior,
    validate_probability,
)
from ask_bayes.errors import InvalidProbability, ZeroMarginalProbability
from ask_bayes.types import Evidence

GRID = [0.0, 0.1, 0.25, 0.5, 0.75, 0.9, 1.0]


class TestValidateProbability:
    """Tests for probability validation."""

    def test_valid_string(self):
        """A string inside [0, 1] parses to a float."""
        assert validate_probability("0.75") == 0.75

    def test_valid_float(self):
        assert validate_probability(0.25) == 0.25

    def test_bounds_inclusive(self):
        """0 and 1 are themselves valid probabilities."""
        assert validate_probability("0") == 0.0
        assert validate_probability("1") == 1.0

    @pytest.mark.parametrize("value", ["1.1", "-0.1", "invalid", "nan", "", None])
    def test_rejects(self, value):
        """Out of range or non-numeric values are rejected."""
        with pytest.raises(InvalidProbability) as exc_info:
            validate_probability(value)
        assert exc_info.value.value == value

    def test_invalid_probability_is_value_error(self):
        with pytest.raises(ValueError):
            validate_probability("2")


class TestMarginalLikelihood:
    """Tests for P(E)."""

    def test_known_value(self):
        """0.75 * 0.75 + 0.5 * 0.25."""
        assert marginal_likelihood(0.75, 0.75, 0.5) == 0.6875

    def test_prior_one_is_likelihood(self):
        assert marginal_likelihood(1.0, 0.3, 0.9) == 0.3

    def test_prior_zero_is_likelihood_not(self):
        assert marginal_likelihood(0.0, 0.3, 0.9) == 0.9

    @pytest.mark.parametrize("prior,likelihood,likelihood_not", itertools.product(GRID, repeat=3))
    def test_complement_sums_to_one(self, prior, likelihood, likelihood_not):
        """P(E) + P(¬E) == 1."""
        p_e = marginal_likelihood(prior, likelihood, likelihood_not)
        assert p_e + negate(p_e) == pytest.approx(1.0)

    def test_negate(self):
        assert negate(0.25) == 0.75
        assert negate(1.0) == 0.0


class TestValidateLikelihoodsAndPrior:
    """Tests for the zero-denominator guard."""

    def test_valid_likelihoods_observed(self):
        validate_likelihoods_and_prior(0.5, 0.75, 0.25, Evidence.OBSERVED, "test")

    def test_valid_likelihoods_not_observed(self):
        validate_likelihoods_and_prior(0.5, 0.75, 0.25, Evidence.NOT_OBSERVED, "test")

    def test_zero_likelihoods_observed(self):
        """P(E) = 0 when both likelihoods are 0."""
        with pytest.raises(ZeroMarginalProbability):
            validate_likelihoods_and_prior(0.5, 0.0, 0.0, Evidence.OBSERVED, "test")

    def test_unit_likelihoods_not_observed(self):
        """P(¬E) = 0 when both likelihoods are 1."""
        with pytest.raises(ZeroMarginalProbability):
            validate_likelihoods_and_prior(0.5, 1.0, 1.0, Evidence.NOT_OBSERVED, "test")

    def test_zero_prior_observed(self):
        """With P(H) = 0 and P(E|¬H) = 0 the evidence is impossible."""
        with pytest.raises(ZeroMarginalProbability):
            validate_likelihoods_and_prior(0.0, 0.5, 0.0, Evidence.OBSERVED, "test")

    def test_unit_prior_not_observed(self):
        """With P(H) = 1 and P(E|H) = 1 missing evidence is impossible."""
        with pytest.raises(ZeroMarginalProbability):
            validate_likelihoods_and_prior(1.0, 1.0, 0.5, Evidence.NOT_OBSERVED, "test")

    def test_zero_likelihoods_fine_when_not_observed(self):
        validate_likelihoods_and_prior(0.5, 0.0, 0.0, Evidence.NOT_OBSERVED, "test")

    def test_observed_message_expands_terms(self):
        """The message shows each substituted term and the hypothesis name."""
        with pytest.raises(ZeroMarginalProbability) as exc_info:
            validate_likelihoods_and_prior(0.25, 0.0, 0.0, Evidence.OBSERVED, "rain")

        message = str(exc_info.value)
        assert "P(E) must be greater than 0" in message
        assert "P(rain)[0.25] * P(E|rain)[0.0] + P(¬rain)[0.75] * P(E|¬rain)[0.0] = 0" in message

    def test_not_observed_message_expands_terms(self):
        with pytest.raises(ZeroMarginalProbability) as exc_info:
            validate_likelihoods_and_prior(0.25, 1.0, 1.0, Evidence.NOT_OBSERVED, "rain")

        message = str(exc_info.value)
        assert "P(¬E) must be greater than 0" in message
        assert "P(¬E|rain)[0.0] * P(rain)[0.25] + P(¬rain)[0.75] * P(¬E|¬rain)[0.0] = 0" in message

    def test_error_carries_inputs(self):
        with pytest.raises(ZeroMarginalProbability) as exc_info:
            validate_likelihoods_and_prior(0.5, 0.0, 0.0, Evidence.OBSERVED, "rain")

        err = exc_info.value
        assert err.name == "rain"
        assert (err.prior, err.likelihood, err.likelihood_not) == (0.5, 0.0, 0.0)
        assert err.evidence is Evidence.OBSERVED


class TestCalculatePosterior:
    """Tests for P(H|E) and P(H|¬E)."""

    def test_evidence_observed(self):
        result = calculate_posterior(0.75, 0.75, 0.5, Evidence.OBSERVED, "test")
        assert result == 0.8181818181818182

    def test_evidence_not_observed(self):
        result = calculate_posterior(0.75, 0.75, 0.5, Evidence.NOT_OBSERVED, "test")
        assert result == 0.6

    def test_uninformative_evidence_keeps_prior(self):
        """Equal likelihoods leave the prior unchanged."""
        result = calculate_posterior(0.3, 0.5, 0.5, Evidence.OBSERVED, "test")
        assert result == pytest.approx(0.3)

    def test_propagates_guard_error(self):
        with pytest.raises(ZeroMarginalProbability):
            calculate_posterior(0.5, 0.0, 0.0, Evidence.OBSERVED, "test")

    @pytest.mark.parametrize("evidence", [Evidence.OBSERVED, Evidence.NOT_OBSERVED])
    @pytest.mark.parametrize("prior,likelihood,likelihood_not", itertools.product(GRID, repeat=3))
    def test_posterior_is_probability(self, prior, likelihood, likelihood_not, evidence):
        """Whenever the denominator is positive the posterior lies in [0, 1]."""
        p_e = marginal_likelihood(prior, likelihood, likelihood_not)
        denominator = p_e if evidence is Evidence.OBSERVED else negate(p_e)

        if denominator <= 0:
            with pytest.raises(ZeroMarginalProbability):
                calculate_posterior(prior, likelihood, likelihood_not, evidence, "test")
            return

        result = calculate_posterior(prior, likelihood, likelihood_not, evidence, "test")
        assert 0.0 <= result <= 1.0 + 1e-12


class TestClampProbability:
    """Tests for limiting a computed posterior to [0, 1]."""

    def test_inside_unchanged(self):
        assert clamp_probability(0.6) == 0.6
        assert clamp_probability(0.0) == 0.0
        assert clamp_probability(1.0) == 1.0

    def test_outside_limited(self):
        assert clamp_probability(1.0000000000000002) == 1.0
        assert clamp_probability(-1e-17) == 0.0

    def test_rounded_posterior(self):
        """A certain posterior that rounds one ulp above 1 comes back as 1."""
        raw = calculate_posterior(0.1, 0.0, 1.0, Evidence.NOT_OBSERVED, "test")
        assert raw == pytest.approx(1.0)
        assert clamp_probability(raw) == 1.0
