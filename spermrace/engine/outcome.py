"""Birth-type outcome roll for a won race."""

from __future__ import annotations

import enum

ODDS_TRIPLETS = 1 / 8000
ODDS_IDENTICAL_TWINS = 1 / 250
ODDS_FRATERNAL_TWINS = 1 / 80


class BirthOutcome(str, enum.Enum):
    SINGLE_BIRTH = "singleBirth"
    IDENTICAL_TWINS = "identicalTwins"
    FRATERNAL_TWINS = "fraternalTwins"
    TRIPLETS = "triplets"

    @property
    def outcome_type(self) -> "OutcomeType":
        return _OUTCOME_TYPES[self]


class OutcomeType(str, enum.Enum):
    """Display category handed to the renderer."""

    NONE = "none"
    SINGLE = "single"
    IDENTICAL = "identical"
    FRATERNAL = "fraternal"
    TRIPLETS = "triplets"
    POPULATION_LOST = "populationLost"


_OUTCOME_TYPES = {
    BirthOutcome.SINGLE_BIRTH: OutcomeType.SINGLE,
    BirthOutcome.IDENTICAL_TWINS: OutcomeType.IDENTICAL,
    BirthOutcome.FRATERNAL_TWINS: OutcomeType.FRATERNAL,
    BirthOutcome.TRIPLETS: OutcomeType.TRIPLETS,
}

# Cumulative upper bounds, rarest first. Single birth takes the remainder.
THRESHOLDS: tuple[tuple[BirthOutcome, float], ...] = (
    (BirthOutcome.TRIPLETS, ODDS_TRIPLETS),
    (BirthOutcome.IDENTICAL_TWINS, ODDS_TRIPLETS + ODDS_IDENTICAL_TWINS),
    (BirthOutcome.FRATERNAL_TWINS, ODDS_TRIPLETS + ODDS_IDENTICAL_TWINS + ODDS_FRATERNAL_TWINS),
)

_BIRTH_LINES = {
    BirthOutcome.TRIPLETS: "And it's TRIPLETS! \U0001F476\U0001F476\U0001F476",
    BirthOutcome.IDENTICAL_TWINS: "And it's IDENTICAL TWINS! \U0001F476\U0001F476",
    BirthOutcome.FRATERNAL_TWINS: "And it's FRATERNAL TWINS! \U0001F476\U0001F476",
    BirthOutcome.SINGLE_BIRTH: "It's a SINGLE BABY! \U0001F476",
}

SELF_WON_TEXT = "The 'YOU' sperm won! \U0001F535"
OTHER_WON_TEXT = "Another sperm won. \U0001F534"
POPULATION_LOST_TEXT = "Population lost. No survivors."


def roll(draw: float) -> BirthOutcome:
    """Map a uniform draw in [0, 1) to a birth outcome."""
    for outcome, upper in THRESHOLDS:
        if draw < upper:
            return outcome
    return BirthOutcome.SINGLE_BIRTH


def describe_result(won_by_self: bool, birth: BirthOutcome | None) -> str:
    """Result banner shown after a capture."""
    headline = SELF_WON_TEXT if won_by_self else OTHER_WON_TEXT
    if birth is None:
        return headline
    return f"{headline}\n{_BIRTH_LINES[birth]}"
