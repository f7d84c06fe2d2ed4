"""Random draws from empirical distributions.

WeightedSampler picks among a fixed set of items with probability
proportional to their weights. NormalDistribution wraps a fitted
mean/standard deviation pair. Neither owns a random generator: every draw
takes the caller's, so a seeded run stays reproducible.
"""

from __future__ import annotations

import bisect
import math
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from itertools import accumulate
from typing import Generic, TypeVar

from dicom_synth.core.exceptions import ConfigurationError

T = TypeVar("T")


class WeightedSampler(Generic[T]):
    """Weighted random choice over an ordered set of items.

    Example:
        >>> sampler = WeightedSampler([("CT", 3.0), ("MR", 1.0)])
        >>> sampler.pick(random.Random(1))
        'CT'

    """

    def __init__(self, pairs: Iterable[tuple[T, float]]):
        pairs = list(pairs)
        self._items: list[T] = [item for item, _ in pairs]
        self._weights: list[float] = [float(weight) for _, weight in pairs]

        if any(w < 0 or math.isnan(w) for w in self._weights):
            raise ConfigurationError(
                "Weights must be non-negative numbers",
                error_code="NEGATIVE_WEIGHT",
                context={"weights": self._weights},
            )

        self._cumulative: list[float] = list(accumulate(self._weights))
        self.total: float = self._cumulative[-1] if self._cumulative else 0.0

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[T]:
        return list(self._items)

    def weight(self, index: int) -> float:
        return self._weights[index]

    def pick(self, rng: random.Random, subset: Sequence[int] | None = None) -> T:
        """Draw one item.

        Args:
            rng: Random generator to draw from
            subset: Optional indices to restrict the draw to; relative
                weights within the subset are preserved

        Returns:
            The chosen item

        Raises:
            ConfigurationError: If the (sub)set carries no weight

        """
        if subset is None:
            if self.total <= 0:
                raise ConfigurationError(
                    "Cannot pick from a sampler with zero total weight",
                    error_code="ZERO_WEIGHT",
                    context={"items": len(self._items)},
                )
            x = rng.random() * self.total
            index = bisect.bisect_right(self._cumulative, x)
            # Guards float rounding at the upper edge
            return self._items[min(index, len(self._items) - 1)]

        indices = list(subset)
        total = sum(self._weights[i] for i in indices)
        if total <= 0:
            raise ConfigurationError(
                "Cannot pick from a subset with zero total weight",
                error_code="ZERO_WEIGHT",
                context={"subset": indices},
            )

        x = rng.random() * total
        running = 0.0
        chosen = indices[-1]
        for i in indices:
            running += self._weights[i]
            if x < running:
                chosen = i
                break
        return self._items[chosen]


@dataclass(frozen=True)
class NormalDistribution:
    """Normal distribution fitted to observed counts."""

    mean: float
    std_dev: float

    def sample(self, rng: random.Random) -> float:
        return rng.gauss(self.mean, self.std_dev)

    def sample_count(self, rng: random.Random, minimum: int = 1) -> int:
        """Sample, floor to an integer and clamp to at least ``minimum``."""
        return max(minimum, math.floor(self.sample(rng)))
