"""Command-line interface for ask-bayes."""

import os
from pathlib import Path
from typing import Optional

import typer

from ask_bayes import __version__
from ask_bayes.bayes import calculate_posterior, clamp_probability, validate_probability
from ask_bayes.config import Config, find_config
from ask_bayes.errors import AskBayesError, HypothesisNotFound, InvalidProbability
from ask_bayes.log import get_logger, setup_logging
from ask_bayes.operations import (
    CliOptions,
    Compute,
    GetPrior,
    Operation,
    RemovePrior,
    SetPrior,
    Wizard,
    resolve_operation,
)
from ask_bayes.report import PosteriorReport, render_report
from ask_bayes.store import get_prior, remove_prior, set_prior
from ask_bayes.types import Evidence, OutputFormat, UpdateHypothesis
from ask_bayes.utils import setup_environment
from ask_bayes.wizard import run_wizard

logger = get_logger(__name__)

app = typer.Typer(
    name="ask-bayes",
    help="Bayesian inference for named hypotheses.",
    add_completion=False,
)


def _probability_callback(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return validate_probability(value)
    except InvalidProbability as e:
        raise typer.BadParameter(str(e)) from e


def _choice_callback(parse):
    def callback(value: Optional[str]):
        if value is None:
            return None
        try:
            return parse(value)
        except ValueError as e:
            raise typer.BadParameter(str(e)) from e

    return callback


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"ask-bayes {__version__}")
        raise typer.Exit()


def _db_path(db: Optional[Path], cfg: Config) -> str:
    if db is not None:
        return str(db)
    return os.environ.get("ASK_BAYES_DB") or cfg.store.path


def _lookup_prior(name: str, db_path: str) -> Optional[float]:
    try:
        return get_prior(name, db_path)
    except HypothesisNotFound:
        return None


def run_operation(
    operation: Operation,
    cfg: Config,
    db_path: str,
    output_format: OutputFormat,
) -> None:
    """Carry out one resolved operation and echo its result."""
    logger.debug("Running %s", operation)

    if isinstance(operation, Wizard):
        operation = run_wizard(
            cfg.defaults,
            lookup_prior=lambda name: _lookup_prior(name, db_path),
        )

    if isinstance(operation, GetPrior):
        prior = get_prior(operation.name, db_path)
        typer.echo(f"P({operation.name}) = {prior}")
        return

    if isinstance(operation, SetPrior):
        prior = set_prior(operation.name, operation.prior, db_path)
        typer.echo(f"P({operation.name}) = {prior}")
        return

    if isinstance(operation, RemovePrior):
        remove_prior(operation.name, db_path)
        typer.echo(f"P({operation.name}) removed")
        return

    if isinstance(operation, Compute):
        prior = operation.prior
        if prior is None:
            prior = _lookup_prior(operation.name, db_path)
            if prior is None:
                prior = cfg.defaults.prior
            else:
                logger.debug("Using saved prior P(%s) = %s", operation.name, prior)

        posterior = clamp_probability(
            calculate_posterior(
                prior,
                operation.likelihood,
                operation.likelihood_not,
                operation.evidence,
                operation.name,
            )
        )
        report = PosteriorReport(
            name=operation.name,
            prior=prior,
            likelihood=operation.likelihood,
            likelihood_not=operation.likelihood_not,
            evidence=operation.evidence,
            posterior=posterior,
        )
        typer.echo(render_report(report, output_format))

        if operation.update is UpdateHypothesis.UPDATE:
            set_prior(operation.name, posterior, db_path)
            typer.echo(
                f"P({operation.name}) has been updated to {posterior}",
                err=output_format is OutputFormat.JSON,
            )


@app.command()
def main(
    name: Optional[str] = typer.Option(
        None,
        "--name",
        "-n",
        help="Name of the hypothesis to update.",
    ),
    prior: Optional[str] = typer.Option(
        None,
        "--prior",
        "-p",
        callback=_probability_callback,
        help="The prior probability of the hypothesis P(H). Defaults to the saved prior.",
    ),
    likelihood: Optional[str] = typer.Option(
        None,
        "--likelihood",
        "-l",
        callback=_probability_callback,
        help="The likelihood of the evidence P(E|H).",
    ),
    likelihood_not: Optional[str] = typer.Option(
        None,
        "--likelihood-not",
        callback=_probability_callback,
        help="The likelihood of the evidence P(E|¬H).",
    ),
    evidence: Optional[str] = typer.Option(
        None,
        "--evidence",
        "-e",
        callback=_choice_callback(Evidence.parse),
        help="Whether supporting evidence is observed (o/observed, n/not-observed).",
    ),
    update_prior: Optional[str] = typer.Option(
        None,
        "--update-prior",
        "-u",
        callback=_choice_callback(UpdateHypothesis.parse),
        help="Save the posterior as the new prior (u/update, n/no-update).",
    ),
    get: bool = typer.Option(
        False,
        "--get-prior",
        "-g",
        help="Print the saved prior of the hypothesis. Only combines with --name.",
    ),
    set_: bool = typer.Option(
        False,
        "--set-prior",
        "-s",
        help="Save --prior as the prior of the hypothesis. Only combines with --name and --prior.",
    ),
    remove: bool = typer.Option(
        False,
        "--remove-prior",
        "-r",
        help="Remove the saved prior of the hypothesis. Only combines with --name.",
    ),
    wizard: bool = typer.Option(
        False,
        "--wizard",
        "-w",
        help="Ask for every input interactively.",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        callback=_choice_callback(OutputFormat.parse),
        help="Output format: table, json or plain.",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration YAML file.",
    ),
    db: Optional[Path] = typer.Option(
        None,
        "--db",
        help="Path to the hypotheses database.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug messages to stderr.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Compute the posterior probability of a hypothesis P(H|E).

    Also reads, saves and removes hypothesis priors.
    """
    setup_environment()
    setup_logging(verbose)

    try:
        cfg = find_config(config)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=1)

    options = CliOptions(
        name=name,
        prior=prior,
        likelihood=likelihood,
        likelihood_not=likelihood_not,
        evidence=evidence,
        update_prior=update_prior,
        get_prior=get,
        set_prior=set_,
        remove_prior=remove,
        wizard=wizard,
    )
    output_format = output if output is not None else OutputFormat.parse(cfg.defaults.output)

    try:
        operation = resolve_operation(options, cfg.defaults)
        run_operation(operation, cfg, _db_path(db, cfg), output_format)
    except AskBayesError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
