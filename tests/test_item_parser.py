"""Tests for item set parsing and construction."""

import pytest
from pydantic import ValidationError

from collector.core.errors import (
    InvalidSelectionError,
    ParseError,
    UnreachableTargetError,
)
from collector.models.simulation_models import Item, ItemSet
from collector.services.item_parser import build_item_set, parse_int_list, parse_item_set

# =============================================================================
# Test Token Parsing
# =============================================================================


class TestParseIntList:
    """Tests for comma-separated integer parsing."""

    def test_parses_with_whitespace(self):
        """Whitespace around tokens is ignored."""
        assert parse_int_list(" 5, 10 ,15 ", "weights") == [5, 10, 15]

    def test_skips_empty_tokens(self):
        """Trailing and doubled commas are tolerated."""
        assert parse_int_list("1,,2,", "targets") == [1, 2]

    def test_empty_string_is_empty_list(self):
        """Blank input yields no values."""
        assert parse_int_list("   ", "targets") == []

    @pytest.mark.parametrize("token", ["abc", "-3", "2.5", "1e3", "+4"])
    def test_rejects_invalid_tokens(self, token):
        """Anything but a non-negative integer raises ParseError."""
        with pytest.raises(ParseError) as exc_info:
            parse_int_list(f"1, {token}", "weights")
        assert token in exc_info.value.message
        assert "weights" in exc_info.value.message
        assert exc_info.value.code == "PARSE_ERROR"

    def test_rejects_integer_past_digit_limit(self):
        """A digit string too long for int() is a ParseError, not a ValueError."""
        token = "1" * 5000
        with pytest.raises(ParseError) as exc_info:
            parse_int_list(f"5, {token}", "weights")
        assert "too many digits" in exc_info.value.message
        assert exc_info.value.code == "PARSE_ERROR"


# =============================================================================
# Test ItemSet Construction
# =============================================================================


class TestBuildItemSet:
    """Tests for ItemSet construction from parsed values."""

    def test_assigns_ids_and_targets(self, sample_weights):
        """Item i gets weights[i-1] and is a target iff i was selected."""
        item_set = build_item_set(sample_weights, [2, 4])

        assert [item.id for item in item_set.items] == [1, 2, 3, 4, 5]
        assert [item.weight for item in item_set.items] == sample_weights
        assert [item.is_target for item in item_set.items] == [False, True, False, True, False]

    def test_derived_fields(self, sample_weights):
        """weight_sum and target_count are derived from the items."""
        item_set = build_item_set(sample_weights, [1, 5])
        assert item_set.weight_sum == 75
        assert item_set.target_count == 2
        assert item_set.target_ids == frozenset({1, 5})

    def test_duplicate_targets_count_once(self, sample_weights):
        """Selecting the same index twice does not double-count it."""
        item_set = build_item_set(sample_weights, [3, 3, 3])
        assert item_set.target_count == 1

    def test_no_targets_allowed(self, sample_weights):
        """An empty selection is a valid configuration."""
        item_set = build_item_set(sample_weights, [])
        assert item_set.target_count == 0

    def test_zero_weight_non_target_allowed(self):
        """Zero-weight items are fine when they are not targets."""
        item_set = build_item_set([0, 4], [2])
        assert item_set.weight_sum == 4

    def test_all_zero_weights_without_targets(self):
        """A zero-weight pool is accepted when nothing must be collected."""
        item_set = build_item_set([0, 0], [])
        assert item_set.weight_sum == 0

    def test_empty_weights_rejected(self):
        """At least one item is required."""
        with pytest.raises(ParseError):
            build_item_set([], [])

    @pytest.mark.parametrize("target", [0, 6, 100])
    def test_out_of_range_target_rejected(self, sample_weights, target):
        """Out-of-range indices reject the whole configuration."""
        with pytest.raises(InvalidSelectionError) as exc_info:
            build_item_set(sample_weights, [1, target])
        assert str(target) in exc_info.value.message
        assert exc_info.value.code == "INVALID_SELECTION"

    def test_zero_weight_target_rejected(self):
        """A target that can never be drawn fails construction."""
        with pytest.raises(UnreachableTargetError) as exc_info:
            build_item_set([5, 0, 10], [1, 2])
        assert "2" in exc_info.value.message
        assert exc_info.value.code == "UNREACHABLE_TARGET"


class TestItemSetModel:
    """Tests for ItemSet invariants enforced by the model itself."""

    def test_direct_construction_rejects_unreachable_target(self):
        """The model enforces the termination precondition on its own."""
        with pytest.raises(UnreachableTargetError):
            ItemSet(items=[Item(id=1, weight=0, is_target=True)])

    def test_non_contiguous_ids_rejected(self):
        """Item ids must run 1..n in order."""
        with pytest.raises(ValidationError):
            ItemSet(items=[Item(id=1, weight=1), Item(id=3, weight=1)])

    def test_negative_weight_rejected(self):
        """Weights are non-negative."""
        with pytest.raises(ValidationError):
            Item(id=1, weight=-1)

    def test_item_set_is_frozen(self, all_targets_set):
        """ItemSet instances are immutable."""
        with pytest.raises(ValidationError):
            all_targets_set.items = ()


# =============================================================================
# Test Text Input
# =============================================================================


class TestParseItemSet:
    """Tests for the text-field entry point."""

    def test_default_calculator_input(self):
        """The calculator's initial field values parse cleanly."""
        item_set = parse_item_set("5, 10, 15, 20, 25", "1,2,3,4,5")
        assert item_set.weight_sum == 75
        assert item_set.target_count == 5

    def test_bad_weight_token(self):
        """Unparseable weights raise ParseError."""
        with pytest.raises(ParseError):
            parse_item_set("5, ten, 15", "1")

    def test_bad_target_token(self):
        """Unparseable targets raise ParseError."""
        with pytest.raises(ParseError):
            parse_item_set("5, 10", "one")

    def test_blank_weights(self):
        """A weight list with no values raises ParseError."""
        with pytest.raises(ParseError):
            parse_item_set(" , ", "")

    def test_oversized_weight_token(self):
        """An oversized weight surfaces as ParseError through the entry point."""
        with pytest.raises(ParseError):
            parse_item_set("5, " + "1" * 5000, "1")
