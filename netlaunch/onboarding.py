"""
Validator onboarding: collect the parameters of a genesis transaction.

Display fields (moniker, website, details, identity, security contact)
and the minimum self delegation come from pre-supplied options with no
interactive fallback. The economic terms are asked interactively from a
fixed descriptor table, one prompt loop for all of them.

Usage:
    profile = ask_validator_info(options.validator, genesis.stake_denom, prompter)
    gentx_path = workspace.generate_gentx(profile, account)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Iterable, Optional

from netlaunch.config.schema import ValidatorOptions
from netlaunch.exceptions import IncompleteInputError
from netlaunch.prompts import Prompter

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Question Definition
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Question:
    """
    A single onboarding question.

    Attributes:
        field: ValidatorProfile attribute the answer populates.
        label: Text shown to the user.
        default: Answer used when the user just presses enter.
        required: Whether an empty answer is rejected.
    """
    field: str
    label: str
    default: Optional[str] = None
    required: bool = False


# Asked in definition order.
VALIDATOR_QUESTIONS: tuple[Question, ...] = (
    Question("staking_amount", "Staking amount", required=True),
    Question("commission_rate", "Commission rate", default="0.10", required=True),
    Question("commission_max_rate", "Commission max rate", default="0.20", required=True),
    Question(
        "commission_max_change_rate", "Commission max change rate",
        default="0.01", required=True,
    ),
)


# ---------------------------------------------------------------------------
# Validator Profile
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidatorProfile:
    """Everything needed to issue one gentx."""
    account: str
    staking_amount: str
    commission_rate: str
    commission_max_rate: str
    commission_max_change_rate: str
    gas_price: str
    moniker: str = ""
    website: str = ""
    details: str = ""
    identity: str = ""
    security_contact: str = ""
    min_self_delegation: str = ""

    def gentx_flags(self) -> dict[str, str]:
        """Optional gentx command flags; empty values are left out by the runner."""
        return {
            "moniker": self.moniker,
            "commission-rate": self.commission_rate,
            "commission-max-rate": self.commission_max_rate,
            "commission-max-change-rate": self.commission_max_change_rate,
            "min-self-delegation": self.min_self_delegation,
            "gas-prices": self.gas_price,
            "details": self.details,
            "identity": self.identity,
            "website": self.website,
            "security-contact": self.security_contact,
        }


# ---------------------------------------------------------------------------
# Prompt loop
# ---------------------------------------------------------------------------

def ask_questions(
    questions: Iterable[Question],
    prompter: Prompter,
) -> dict[str, str]:
    """
    Ask every question in order and return answers keyed by field.

    Raises:
        IncompleteInputError: If any required answer is empty. Raised only
            after all questions were asked, listing every missing field.
    """
    answers: dict[str, str] = {}
    missing: list[str] = []

    for question in questions:
        answer = prompter.ask(question.label, question.default).strip()
        if not answer and question.default is not None:
            answer = question.default
        if question.required and not answer:
            missing.append(question.field)
        answers[question.field] = answer

    if missing:
        raise IncompleteInputError(
            f"Missing required answers: {', '.join(missing)}",
            fields=missing,
        )
    return answers


def default_gas_price(stake_denom: str) -> str:
    return "0" + stake_denom


def ask_validator_info(
    options: ValidatorOptions,
    stake_denom: str,
    prompter: Prompter,
    questions: tuple[Question, ...] = VALIDATOR_QUESTIONS,
) -> ValidatorProfile:
    """
    Build a ValidatorProfile from options plus interactive answers.

    The gas price is never asked: it is the option value when given,
    otherwise a zero amount of the stake denomination.
    """
    base = ValidatorProfile(
        account=options.account,
        staking_amount="",
        commission_rate="",
        commission_max_rate="",
        commission_max_change_rate="",
        gas_price=options.gas_price or default_gas_price(stake_denom),
        moniker=options.moniker or "",
        website=options.website or "",
        details=options.details or "",
        identity=options.identity or "",
        security_contact=options.security_contact or "",
        min_self_delegation=options.self_delegation or "",
    )

    answers = ask_questions(questions, prompter)
    profile = replace(base, **answers)

    logger.info(
        "validator_profile_collected",
        extra={"account": profile.account, "staking_amount": profile.staking_amount},
    )
    return profile
