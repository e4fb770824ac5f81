"""
Tests for validator onboarding.

Covers:
- Question table order and defaults
- ask_questions(): defaults, missing required answers reported together
- ask_validator_info(): option fields, gas price fallback, gentx flags
"""

from __future__ import annotations

import pytest

from netlaunch.config.schema import ValidatorOptions
from netlaunch.exceptions import IncompleteInputError
from netlaunch.onboarding import (
    VALIDATOR_QUESTIONS,
    Question,
    ask_questions,
    ask_validator_info,
    default_gas_price,
)
from tests.fakes import ScriptedPrompter


class TestQuestionTable:

    def test_order_and_defaults(self):
        assert [(q.field, q.default) for q in VALIDATOR_QUESTIONS] == [
            ("staking_amount", None),
            ("commission_rate", "0.10"),
            ("commission_max_rate", "0.20"),
            ("commission_max_change_rate", "0.01"),
        ]

    def test_all_required(self):
        assert all(q.required for q in VALIDATOR_QUESTIONS)


class TestAskQuestions:

    def test_defaults_fill_empty_answers(self):
        prompter = ScriptedPrompter(answers=["100stake", "", "", ""])
        answers = ask_questions(VALIDATOR_QUESTIONS, prompter)
        assert answers == {
            "staking_amount": "100stake",
            "commission_rate": "0.10",
            "commission_max_rate": "0.20",
            "commission_max_change_rate": "0.01",
        }

    def test_prompter_sees_defaults(self):
        prompter = ScriptedPrompter(answers=["100stake"])
        ask_questions(VALIDATOR_QUESTIONS, prompter)
        assert prompter.asked[0] == ("Staking amount", None)
        assert prompter.asked[1] == ("Commission rate", "0.10")

    def test_missing_required_answer(self):
        prompter = ScriptedPrompter(answers=["   "])
        with pytest.raises(IncompleteInputError) as exc:
            ask_questions(VALIDATOR_QUESTIONS, prompter)
        assert exc.value.fields == ["staking_amount"]
        # every question was still asked
        assert len(prompter.asked) == len(VALIDATOR_QUESTIONS)

    def test_reports_all_missing_fields(self):
        questions = (
            Question("a", "A", required=True),
            Question("b", "B"),
            Question("c", "C", required=True),
        )
        with pytest.raises(IncompleteInputError) as exc:
            ask_questions(questions, ScriptedPrompter())
        assert exc.value.fields == ["a", "c"]

    def test_optional_may_be_empty(self):
        answers = ask_questions((Question("note", "Note"),), ScriptedPrompter())
        assert answers == {"note": ""}


class TestAskValidatorInfo:

    def test_builds_profile(self):
        options = ValidatorOptions(
            account="alice",
            moniker="val-1",
            website="https://val.example",
            self_delegation="1",
        )
        prompter = ScriptedPrompter(answers=["95000000uorb", "0.05", "", ""])
        profile = ask_validator_info(options, "uorb", prompter)

        assert profile.account == "alice"
        assert profile.staking_amount == "95000000uorb"
        assert profile.commission_rate == "0.05"
        assert profile.commission_max_rate == "0.20"
        assert profile.min_self_delegation == "1"
        assert profile.gas_price == "0uorb"
        assert profile.details == ""

    def test_gas_price_option_wins(self):
        options = ValidatorOptions(gas_price="0.025uorb")
        profile = ask_validator_info(options, "uorb", ScriptedPrompter(answers=["1uorb"]))
        assert profile.gas_price == "0.025uorb"

    def test_gentx_flags(self):
        options = ValidatorOptions(identity="ABCD1234", security_contact="sec@val.example")
        profile = ask_validator_info(options, "stake", ScriptedPrompter(answers=["1stake"]))
        flags = profile.gentx_flags()
        assert flags["identity"] == "ABCD1234"
        assert flags["security-contact"] == "sec@val.example"
        assert flags["commission-rate"] == "0.10"
        assert flags["website"] == ""

    def test_incomplete_answers_give_no_profile(self):
        with pytest.raises(IncompleteInputError):
            ask_validator_info(ValidatorOptions(), "stake", ScriptedPrompter())

    def test_default_gas_price(self):
        assert default_gas_price("stake") == "0stake"
