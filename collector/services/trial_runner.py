"""Single-trial collection logic."""

from collector.models.simulation_models import ItemSet
from collector.services.sampler import Sampler


class TrialRunner:
    """Runs trials that draw until every target item has been seen once."""

    def __init__(self, sampler: Sampler) -> None:
        self.sampler = sampler

    def run_trial(self, item_set: ItemSet) -> int:
        """Run one trial.

        Args:
            item_set: Pool to draw from. Every target must have weight > 0,
                which ItemSet guarantees at construction.

        Returns:
            The draw count at which the last missing target was collected,
            or 0 when there are no targets (no draw is made).
        """
        missing = set(item_set.target_ids)
        if not missing:
            return 0

        n = 0
        while True:
            item = self.sampler.draw(item_set)
            n += 1
            if item.id in missing:
                missing.discard(item.id)
                if not missing:
                    return n

    def run_trials(self, item_set: ItemSet, count: int) -> list[int]:
        """Run ``count`` trials sequentially and return their draw counts."""
        return [self.run_trial(item_set) for _ in range(count)]
