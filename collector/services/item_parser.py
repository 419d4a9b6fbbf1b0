"""Turn raw calculator input into a validated ItemSet.

Weights and targets arrive as comma-separated text. Empty tokens are
skipped so trailing commas and double commas are tolerated; anything
else that is not a non-negative integer is rejected.

Out-of-range target indices reject the whole configuration rather than
being ignored or clamped.
"""

from collections.abc import Iterable, Sequence

from collector.core.errors import InvalidSelectionError, ParseError
from collector.core.logging_config import get_logger
from collector.models.simulation_models import Item, ItemSet

logger = get_logger(__name__)


def parse_int_list(text: str, field_name: str) -> list[int]:
    """Parse comma-separated non-negative integers.

    Args:
        text: Raw input such as ``"5, 10, 15"``.
        field_name: Name used in error messages ("weights", "targets").

    Returns:
        Parsed integers in input order.

    Raises:
        ParseError: If a non-empty token is not a non-negative integer.
    """
    values: list[int] = []
    for token in text.split(","):
        token = token.strip()
        if not token:
            continue
        # isdecimal() rejects signs, decimals and exponents up front
        if not token.isdecimal():
            raise ParseError(f"Invalid {field_name} value {token!r}: expected a non-negative integer")
        try:
            values.append(int(token))
        except ValueError as e:
            # int() refuses digit strings past sys.get_int_max_str_digits()
            raise ParseError(
                f"Invalid {field_name} value {token[:20]!r}...: integer has too many digits"
            ) from e
    return values


def build_item_set(weights: Sequence[int], targets: Iterable[int]) -> ItemSet:
    """Build an ItemSet from already-parsed weights and 1-based target indices.

    Raises:
        ParseError: If there are no weights or a weight is negative.
        InvalidSelectionError: If a target index refers to no item.
        UnreachableTargetError: If a target item has weight 0.
    """
    if not weights:
        raise ParseError("At least one weight is required")
    for weight in weights:
        if weight < 0:
            raise ParseError(f"Invalid weights value {weight!r}: expected a non-negative integer")

    target_set = set(targets)
    out_of_range = sorted(t for t in target_set if t < 1 or t > len(weights))
    if out_of_range:
        ids = ", ".join(str(t) for t in out_of_range)
        raise InvalidSelectionError(
            f"Target index {ids} does not match any item (valid range is 1-{len(weights)})"
        )

    items = tuple(
        Item(id=index, weight=weight, is_target=index in target_set)
        for index, weight in enumerate(weights, start=1)
    )
    return ItemSet(items=items)


def parse_item_set(weights_text: str, targets_text: str) -> ItemSet:
    """Parse calculator text fields into an ItemSet.

    Args:
        weights_text: Comma-separated item weights, e.g. ``"5, 10, 15, 20, 25"``.
        targets_text: Comma-separated 1-based indices, e.g. ``"1,2,3"``.

    Returns:
        Validated, immutable ItemSet.

    Raises:
        ParseError, InvalidSelectionError, UnreachableTargetError
    """
    weights = parse_int_list(weights_text, "weights")
    targets = parse_int_list(targets_text, "targets")
    item_set = build_item_set(weights, targets)

    logger.debug(
        "Parsed item set",
        extra={
            "extra_data": {
                "item_count": len(item_set.items),
                "target_count": item_set.target_count,
                "weight_sum": item_set.weight_sum,
            }
        },
    )
    return item_set
