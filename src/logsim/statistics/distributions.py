"""
Statistical distributions for log traffic generation.

Every distribution samples from an explicitly passed ``random.Random`` so a
seeded generator reproduces the same cadence and field values in tests.
"""

import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class Distribution(ABC):
    """Base class for statistical distributions."""

    @abstractmethod
    def sample(self, rng: random.Random) -> Any:
        """Draw a single sample from the distribution."""
        pass


@dataclass
class UniformDistribution(Distribution):
    """Uniform distribution over [low, high]."""

    low: float = 0.0
    high: float = 1.0

    def sample(self, rng: random.Random) -> float:
        return rng.uniform(self.low, self.high)


@dataclass
class IntegerDistribution(Distribution):
    """
    Discrete uniform distribution over the inclusive range [low, high].

    Good for: scenarios per tick, burst sizes, retry counts.
    """

    low: int = 0
    high: int = 1

    def __post_init__(self):
        if self.high < self.low:
            raise ValueError(f"IntegerDistribution high ({self.high}) < low ({self.low})")

    def sample(self, rng: random.Random) -> int:
        return rng.randint(self.low, self.high)


@dataclass
class CategoricalDistribution(Distribution):
    """
    Categorical distribution - discrete choices with weights.

    Good for: status codes, outcome selection, picking scenarios.
    Without weights every category is equally likely.
    """

    categories: list[Any] = field(default_factory=list)
    weights: list[float] = field(default_factory=list)

    def __post_init__(self):
        if not self.weights and self.categories:
            self.weights = [1.0] * len(self.categories)
        if len(self.weights) != len(self.categories):
            raise ValueError("CategoricalDistribution needs one weight per category")
        total = sum(self.weights)
        if total > 0:
            self.weights = [w / total for w in self.weights]

    def sample(self, rng: random.Random) -> Any:
        if not self.categories:
            raise ValueError("CategoricalDistribution requires at least one category")
        return rng.choices(self.categories, weights=self.weights)[0]

    def sample_many(self, rng: random.Random, k: int) -> list[Any]:
        """Draw k independent samples (with replacement)."""
        if not self.categories:
            raise ValueError("CategoricalDistribution requires at least one category")
        return rng.choices(self.categories, weights=self.weights, k=k)


@dataclass
class BernoulliDistribution(Distribution):
    """
    Bernoulli distribution - single binary outcome.

    Good for: job success, delivery success, blocked/allowed.
    """

    p: float = 0.5

    def sample(self, rng: random.Random) -> bool:
        return rng.random() < self.p
