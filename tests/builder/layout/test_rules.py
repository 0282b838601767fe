"""
Tests for builder.layout.rules

Test Coverage:
- select_flush_rule(): priority order and the unflushable end state
- RunState: accumulation and reset
- arrange_slots(): three-slot placement
"""

import pytest

from photobook_toolkit.builder.layout.rules import (
    FLUSH_RULES,
    InvariantViolation,
    RunState,
    arrange_slots,
    select_flush_rule,
)
from photobook_toolkit.core.models import PageKind


class TestSelectFlushRule:
    """Tests for flush rule selection."""

    @pytest.mark.parametrize("run_length, landscapes, is_last, expected", [
        (3, 1, False, PageKind.TWO_PORTRAITS_ONE_LANDSCAPE),
        (3, 1, True, PageKind.TWO_PORTRAITS_ONE_LANDSCAPE),
        (4, 0, False, PageKind.FOUR_PORTRAITS),
        (4, 1, True, PageKind.FOUR_PORTRAITS),
        (1, 0, True, PageKind.ONE_PORTRAIT),
        (1, 1, True, PageKind.ONE_PORTRAIT),
        (2, 0, True, PageKind.TWO_LANDSCAPES),
        (3, 0, True, PageKind.TWO_PORTRAITS_ONE_LANDSCAPE),
    ])
    def test_select_when_rule_matches_then_kind(self, run_length, landscapes, is_last, expected):
        rule = select_flush_rule(run_length, landscapes, is_last)
        assert rule is not None
        assert rule.kind is expected

    @pytest.mark.parametrize("run_length, landscapes", [(1, 0), (2, 0), (2, 1), (3, 0)])
    def test_select_when_not_last_and_run_incomplete_then_none(self, run_length, landscapes):
        assert select_flush_rule(run_length, landscapes, False) is None

    def test_select_when_single_landscape_triple_then_takes_priority(self):
        # Matches both the triple rule and the trailing triple rule
        rule = select_flush_rule(3, 1, True)
        assert rule.name == "single_landscape_triple"

    def test_select_when_last_and_empty_run_then_invariant_violation(self):
        with pytest.raises(InvariantViolation):
            select_flush_rule(0, 0, True)

    def test_select_when_last_and_overlong_run_then_invariant_violation(self):
        with pytest.raises(InvariantViolation, match="length=5"):
            select_flush_rule(5, 0, True)

    def test_rules_are_in_priority_order(self):
        assert [rule.name for rule in FLUSH_RULES] == [
            "single_landscape_triple",
            "full_run",
            "trailing_single",
            "trailing_pair",
            "trailing_triple",
        ]


class TestRunState:

    def test_append_counts_landscapes(self, landscape, portrait):
        # Arrange
        state = RunState()

        # Act
        state.append(0, portrait())
        state.append(3, landscape())

        # Assert
        assert state.length == 2
        assert state.landscape_count == 1

    def test_drain_returns_run_and_resets(self, landscape, portrait):
        state = RunState()
        p, l = portrait("p.jpg"), landscape("l.jpg")
        state.append(1, p)
        state.append(2, l)

        run = state.drain()

        assert run == [(1, p), (2, l)]
        assert state.length == 0
        assert state.landscape_count == 0


class TestArrangeSlots:

    def test_three_slots_when_landscape_first_then_moved_last(self, landscape, portrait):
        l, p1, p2 = landscape("l.jpg"), portrait("p1.jpg"), portrait("p2.jpg")
        assert arrange_slots(PageKind.TWO_PORTRAITS_ONE_LANDSCAPE, [l, p1, p2]) == (p1, p2, l)

    def test_three_slots_when_landscape_middle_then_others_keep_order(self, landscape, portrait):
        p1, l, p2 = portrait("p1.jpg"), landscape("l.jpg"), portrait("p2.jpg")
        assert arrange_slots(PageKind.TWO_PORTRAITS_ONE_LANDSCAPE, [p1, l, p2]) == (p1, p2, l)

    def test_three_slots_when_no_landscape_then_run_order(self, portrait):
        ps = [portrait(f"p{i}.jpg") for i in range(3)]
        assert arrange_slots(PageKind.TWO_PORTRAITS_ONE_LANDSCAPE, ps) == tuple(ps)

    def test_four_slots_keep_run_order(self, landscape, portrait):
        images = [portrait("p0.jpg"), landscape("l.jpg"), portrait("p2.jpg"), portrait("p3.jpg")]
        assert arrange_slots(PageKind.FOUR_PORTRAITS, images) == tuple(images)
