"""Resolution of command-line flags into a single operation.

The CLI collects raw option values into ``CliOptions``; ``resolve_operation``
checks flag conflicts and returns exactly one of ``Compute``, ``GetPrior``,
``SetPrior``, ``RemovePrior`` or ``Wizard``.
"""

from dataclasses import dataclass
from typing import Optional, Union

from ask_bayes.config import DefaultsConfig
from ask_bayes.errors import ConflictingOptions
from ask_bayes.types import Evidence, UpdateHypothesis


@dataclass(frozen=True)
class CliOptions:
    """Option values as given on the command line; ``None`` means omitted."""

    name: Optional[str] = None
    prior: Optional[float] = None
    likelihood: Optional[float] = None
    likelihood_not: Optional[float] = None
    evidence: Optional[Evidence] = None
    update_prior: Optional[UpdateHypothesis] = None
    get_prior: bool = False
    set_prior: bool = False
    remove_prior: bool = False
    wizard: bool = False


@dataclass(frozen=True)
class Compute:
    """Compute a posterior, optionally saving it as the new prior.

    ``prior`` is ``None`` when the saved prior (or the configured default)
    should be used.
    """

    name: str
    prior: Optional[float]
    likelihood: float
    likelihood_not: float
    evidence: Evidence
    update: UpdateHypothesis = UpdateHypothesis.NO_UPDATE


@dataclass(frozen=True)
class GetPrior:
    name: str


@dataclass(frozen=True)
class SetPrior:
    name: str
    prior: float


@dataclass(frozen=True)
class RemovePrior:
    name: str


@dataclass(frozen=True)
class Wizard:
    pass


Operation = Union[Compute, GetPrior, SetPrior, RemovePrior, Wizard]

_FLAG_NAMES = {
    "name": "--name",
    "prior": "--prior",
    "likelihood": "--likelihood",
    "likelihood_not": "--likelihood-not",
    "evidence": "--evidence",
    "update_prior": "--update-prior",
}

# Value options each mode refuses
_CONFLICTS = {
    "get_prior": ("prior", "likelihood", "likelihood_not", "evidence", "update_prior"),
    "set_prior": ("likelihood", "likelihood_not", "evidence", "update_prior"),
    "remove_prior": ("prior", "likelihood", "likelihood_not", "evidence", "update_prior"),
    "wizard": ("name", "prior", "likelihood", "likelihood_not", "evidence", "update_prior"),
}


def _mode_flag(mode: str) -> str:
    return "--" + mode.replace("_", "-")


def _check_conflicts(options: CliOptions, mode: str) -> None:
    supplied = [
        _FLAG_NAMES[field]
        for field in _CONFLICTS[mode]
        if getattr(options, field) is not None
    ]
    if supplied:
        raise ConflictingOptions(
            f"{_mode_flag(mode)} cannot be used with {', '.join(supplied)}"
        )


def _require_name(options: CliOptions) -> str:
    if options.name is None or not options.name.strip():
        raise ConflictingOptions("--name is required")
    return options.name


def resolve_operation(
    options: CliOptions,
    defaults: Optional[DefaultsConfig] = None,
) -> Operation:
    """Turn parsed flags into one operation.

    Args:
        options: Raw option values.
        defaults: Values for omitted compute options.

    Returns:
        The operation to run.

    Raises:
        ConflictingOptions: If the flags are contradictory or incomplete.
    """
    if defaults is None:
        defaults = DefaultsConfig()

    modes = [
        mode
        for mode in ("get_prior", "set_prior", "remove_prior", "wizard")
        if getattr(options, mode)
    ]
    if len(modes) > 1:
        raise ConflictingOptions(
            f"{' and '.join(_mode_flag(m) for m in modes)} cannot be used together"
        )

    mode = modes[0] if modes else None
    if mode is not None:
        _check_conflicts(options, mode)

    if mode == "wizard":
        return Wizard()

    name = _require_name(options)

    if mode == "get_prior":
        return GetPrior(name=name)
    if mode == "remove_prior":
        return RemovePrior(name=name)
    if mode == "set_prior":
        if options.prior is None:
            raise ConflictingOptions("--set-prior requires --prior")
        return SetPrior(name=name, prior=options.prior)

    return Compute(
        name=name,
        prior=options.prior,
        likelihood=(
            options.likelihood if options.likelihood is not None else defaults.likelihood
        ),
        likelihood_not=(
            options.likelihood_not
            if options.likelihood_not is not None
            else defaults.likelihood_not
        ),
        evidence=(
            options.evidence
            if options.evidence is not None
            else Evidence.parse(defaults.evidence)
        ),
        update=(
            options.update_prior
            if options.update_prior is not None
            else UpdateHypothesis.NO_UPDATE
        ),
    )
