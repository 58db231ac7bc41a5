"""Tests for the birth outcome roll."""

from __future__ import annotations

from spermrace.engine.outcome import (
    THRESHOLDS,
    BirthOutcome,
    OutcomeType,
    describe_result,
    roll,
)


def test_roll_buckets_rarest_first() -> None:
    assert roll(0.0) == BirthOutcome.TRIPLETS
    assert roll(1 / 8000 - 1e-12) == BirthOutcome.TRIPLETS
    assert roll(1 / 8000) == BirthOutcome.IDENTICAL_TWINS
    assert roll(1 / 8000 + 1 / 250 - 1e-12) == BirthOutcome.IDENTICAL_TWINS
    assert roll(1 / 8000 + 1 / 250) == BirthOutcome.FRATERNAL_TWINS
    assert roll(1 / 8000 + 1 / 250 + 1 / 80 - 1e-12) == BirthOutcome.FRATERNAL_TWINS
    assert roll(1 / 8000 + 1 / 250 + 1 / 80) == BirthOutcome.SINGLE_BIRTH
    assert roll(0.5) == BirthOutcome.SINGLE_BIRTH
    assert roll(0.999999) == BirthOutcome.SINGLE_BIRTH


def test_thresholds_partition_unit_interval() -> None:
    uppers = [upper for _, upper in THRESHOLDS]
    assert uppers == sorted(uppers)
    assert 0.0 < uppers[0]
    assert uppers[-1] < 1.0
    assert [outcome for outcome, _ in THRESHOLDS] == [
        BirthOutcome.TRIPLETS,
        BirthOutcome.IDENTICAL_TWINS,
        BirthOutcome.FRATERNAL_TWINS,
    ]


def test_single_birth_is_most_frequent_bucket() -> None:
    draws = [index / 100000 for index in range(100000)]
    counts = {outcome: 0 for outcome in BirthOutcome}
    for draw in draws:
        counts[roll(draw)] += 1
    assert sum(counts.values()) == len(draws)
    assert max(counts, key=counts.get) == BirthOutcome.SINGLE_BIRTH
    assert counts[BirthOutcome.TRIPLETS] < counts[BirthOutcome.IDENTICAL_TWINS] < counts[BirthOutcome.FRATERNAL_TWINS]


def test_outcome_type_and_result_text() -> None:
    assert BirthOutcome.IDENTICAL_TWINS.outcome_type == OutcomeType.IDENTICAL
    assert BirthOutcome.SINGLE_BIRTH.outcome_type.value == "single"

    text = describe_result(True, BirthOutcome.TRIPLETS)
    assert text.startswith("The 'YOU' sperm won!")
    assert "TRIPLETS" in text
    assert describe_result(False, None).startswith("Another sperm won.")
