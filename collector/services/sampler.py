"""Weighted random item selection."""

import random

from collector.models.simulation_models import Item, ItemSet


class Sampler:
    """Draws items with probability proportional to weight.

    Each sampler owns its random generator. Never share one sampler
    between threads; give every worker its own.

    Typical usage:
        sampler = Sampler(random.Random(42))
        item = sampler.draw(item_set)
    """

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng

    def draw(self, item_set: ItemSet) -> Item:
        """Draw one item by inverse-CDF scan over the items in input order.

        A uniform integer r in [1, weight_sum] is reduced by each item's
        weight until the first item whose weight covers r. Earlier items
        win ties.

        Raises:
            ValueError: If the pool has no weight to draw from.
        """
        weight_sum = item_set.weight_sum
        if weight_sum <= 0:
            raise ValueError("Cannot draw from an item set with zero total weight")

        r = self.rng.randint(1, weight_sum)
        for item in item_set.items:
            if r <= item.weight:
                return item
            r -= item.weight

        # Unreachable while weight_sum matches the items
        raise RuntimeError("Weighted scan ran past the last item")
