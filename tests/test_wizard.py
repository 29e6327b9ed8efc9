"""Tests for the interactive wizard."""

import pytest
import typer

from ask_bayes.config import DefaultsConfig
from ask_bayes.operations import Compute
from ask_bayes.types import Evidence, UpdateHypothesis
from ask_bayes.wizard import WIZARD_STEPS, run_wizard


class ScriptedPrompt:
    """Stands in for typer.prompt, answering from a script.

    An empty answer takes the default, as a terminal prompt does. Answers the
    validator rejects are recorded and the next one is tried.
    """

    def __init__(self, answers):
        self.answers = list(answers)
        self.questions = []
        self.defaults = []
        self.rejected = []
        self.to_stderr = []

    def __call__(self, text, default=None, value_proc=None, err=False):
        self.questions.append(text)
        self.to_stderr.append(err)
        self.defaults.append(default)
        while True:
            answer = self.answers.pop(0)
            if answer == "":
                answer = default
            try:
                return value_proc(answer)
            except typer.BadParameter:
                self.rejected.append(answer)


class TestRunWizard:
    """Tests for run_wizard."""

    def test_all_answers(self):
        prompt = ScriptedPrompt(["rain", "0.75", "0.75", "0.5", "n", "u"])
        operation = run_wizard(prompt=prompt)

        assert operation == Compute(
            name="rain",
            prior=0.75,
            likelihood=0.75,
            likelihood_not=0.5,
            evidence=Evidence.NOT_OBSERVED,
            update=UpdateHypothesis.UPDATE,
        )
        assert len(prompt.questions) == len(WIZARD_STEPS)

    def test_defaults_from_config(self):
        defaults = DefaultsConfig(prior=0.2, likelihood=0.9, likelihood_not=0.4, evidence="o")
        prompt = ScriptedPrompt(["rain", "", "", "", "", ""])
        operation = run_wizard(defaults, prompt=prompt)

        assert operation == Compute(
            name="rain",
            prior=0.2,
            likelihood=0.9,
            likelihood_not=0.4,
            evidence=Evidence.OBSERVED,
            update=UpdateHypothesis.NO_UPDATE,
        )

    def test_saved_prior_offered_as_default(self):
        saved = {"rain": 0.35}
        prompt = ScriptedPrompt(["rain", "", "", "", "", ""])
        operation = run_wizard(lookup_prior=saved.get, prompt=prompt)

        assert prompt.defaults[1] == 0.35
        assert operation.prior == 0.35

    def test_reasks_after_invalid_answers(self):
        prompt = ScriptedPrompt(["  ", "rain", "1.5", "abc", "0.3", "", "", "maybe", "o", ""])
        operation = run_wizard(prompt=prompt)

        assert prompt.rejected == ["  ", "1.5", "abc", "maybe"]
        assert operation.name == "rain"
        assert operation.prior == 0.3
        assert operation.evidence is Evidence.OBSERVED

    def test_questions_go_to_stderr(self):
        prompt = ScriptedPrompt(["rain", "", "", "", "", ""])
        run_wizard(prompt=prompt)

        assert all(prompt.to_stderr)

    @pytest.mark.parametrize("step", WIZARD_STEPS, ids=lambda s: s.field)
    def test_fields_match_compute(self, step):
        assert step.field in Compute.__dataclass_fields__
