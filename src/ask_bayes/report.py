"""Rendering of a computed posterior for the terminal."""

import io
import json
from dataclasses import dataclass
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ask_bayes.types import Evidence, OutputFormat


@dataclass(frozen=True)
class PosteriorReport:
    """Inputs and result of one posterior computation."""

    name: str
    prior: float
    likelihood: float
    likelihood_not: float
    evidence: Evidence
    posterior: float

    def rows(self) -> list[tuple[str, float]]:
        """(label, value) pairs in display order."""
        given = "E" if self.evidence is Evidence.OBSERVED else "¬E"
        return [
            (f"P({self.name})", self.prior),
            (f"P(E|{self.name})", self.likelihood),
            (f"P(E|¬{self.name})", self.likelihood_not),
            (f"P({self.name}|{given})", self.posterior),
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "prior": self.prior,
            "likelihood": self.likelihood,
            "likelihood_null": self.likelihood_not,
            "evidence": self.evidence.label,
            "posterior_probability": self.posterior,
        }


def render_table(report: PosteriorReport) -> str:
    """Bordered two-column table."""
    table = Table(box=box.ASCII, show_header=False)
    table.add_column("term")
    table.add_column("value")
    for label, value in report.rows():
        table.add_row(Text(label), Text(str(value)))

    buffer = io.StringIO()
    Console(file=buffer, width=200, color_system=None).print(table)
    return "\n".join(line.rstrip() for line in buffer.getvalue().splitlines())


def render_json(report: PosteriorReport) -> str:
    return json.dumps(report.to_dict(), indent=2, ensure_ascii=False)


def render_plain(report: PosteriorReport) -> str:
    return "\n".join(f"{label} = {value}" for label, value in report.rows())


RENDERERS = {
    OutputFormat.TABLE: render_table,
    OutputFormat.JSON: render_json,
    OutputFormat.PLAIN: render_plain,
}


def render_report(report: PosteriorReport, output_format: OutputFormat) -> str:
    """Render a report in the requested format.

    Args:
        report: Computed posterior and its inputs.
        output_format: Table, JSON or plain text.

    Returns:
        Text ready to echo.
    """
    return RENDERERS[output_format](report)
