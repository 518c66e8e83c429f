"""Statistical distributions and sampling for realistic log generation."""

from .distributions import (
    BernoulliDistribution,
    CategoricalDistribution,
    Distribution,
    IntegerDistribution,
    UniformDistribution,
)

__all__ = [
    "Distribution",
    "UniformDistribution",
    "IntegerDistribution",
    "CategoricalDistribution",
    "BernoulliDistribution",
]
