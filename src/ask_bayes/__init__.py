"""
Ask Bayes: Bayesian updates for named hypotheses from the command line.

This package computes the posterior probability of a hypothesis given observed
or unobserved evidence, and keeps a small local store of hypothesis priors.
"""

__version__ = "0.2.1"
