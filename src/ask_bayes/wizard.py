"""Interactive wizard that asks for each input in turn.

The wizard is a list of steps. Each step names the field it fills, the
question, a validator and a default; answers feed the same ``Compute``
operation the command-line flags produce.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

import typer

from ask_bayes.bayes import validate_probability
from ask_bayes.config import DefaultsConfig
from ask_bayes.errors import InvalidProbability
from ask_bayes.operations import Compute
from ask_bayes.types import Evidence, UpdateHypothesis

PromptFn = Callable[..., Any]
PriorLookup = Callable[[str], Optional[float]]


def _name(value: Any) -> str:
    text = str(value).strip()
    if not text:
        raise typer.BadParameter("Hypothesis name cannot be empty")
    return text


def _probability(value: Any) -> float:
    try:
        return validate_probability(value)
    except InvalidProbability as e:
        raise typer.BadParameter(str(e)) from e


def _choice(parse: Callable[[str], Any]) -> Callable[[Any], Any]:
    def convert(value: Any) -> Any:
        try:
            return parse(value)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e

    return convert


@dataclass(frozen=True)
class WizardStep:
    """One question: fills ``field`` using ``validate`` and a default."""

    field: str
    question: str
    validate: Callable[[Any], Any]
    default: Callable[[dict[str, Any], DefaultsConfig, PriorLookup], Any]


def _prior_default(
    answers: dict[str, Any], defaults: DefaultsConfig, lookup: PriorLookup
) -> float:
    stored = lookup(answers["name"])
    return stored if stored is not None else defaults.prior


WIZARD_STEPS = [
    WizardStep(
        "name",
        "Name of the hypothesis",
        _name,
        lambda answers, defaults, lookup: None,
    ),
    WizardStep(
        "prior",
        "Prior probability of the hypothesis P(H)",
        _probability,
        _prior_default,
    ),
    WizardStep(
        "likelihood",
        "Likelihood of the evidence P(E|H)",
        _probability,
        lambda answers, defaults, lookup: defaults.likelihood,
    ),
    WizardStep(
        "likelihood_not",
        "Likelihood of the evidence P(E|¬H)",
        _probability,
        lambda answers, defaults, lookup: defaults.likelihood_not,
    ),
    WizardStep(
        "evidence",
        "Was the evidence observed? (o/n)",
        _choice(Evidence.parse),
        lambda answers, defaults, lookup: defaults.evidence,
    ),
    WizardStep(
        "update",
        "Save the posterior as the new prior? (u/n)",
        _choice(UpdateHypothesis.parse),
        lambda answers, defaults, lookup: "n",
    ),
]


def run_wizard(
    defaults: Optional[DefaultsConfig] = None,
    lookup_prior: Optional[PriorLookup] = None,
    prompt: PromptFn = typer.prompt,
) -> Compute:
    """Ask for every compute input and return the resulting operation.

    Args:
        defaults: Defaults offered for each question.
        lookup_prior: Returns the saved prior of a hypothesis, or None.
        prompt: Prompt function with ``typer.prompt``'s signature. Questions
            go to stderr so stdout only carries the report.

    Returns:
        A fully specified ``Compute`` operation.
    """
    if defaults is None:
        defaults = DefaultsConfig()
    if lookup_prior is None:
        lookup_prior = lambda name: None  # noqa: E731

    answers: dict[str, Any] = {}
    for step in WIZARD_STEPS:
        default = step.default(answers, defaults, lookup_prior)
        answers[step.field] = prompt(
            step.question,
            default=default,
            value_proc=step.validate,
            err=True,
        )

    return Compute(**answers)
