"""Tests for the sampling distributions."""

import random

import pytest

from logsim.statistics import (
    BernoulliDistribution,
    CategoricalDistribution,
    IntegerDistribution,
    UniformDistribution,
)


def test_integer_distribution_is_inclusive() -> None:
    """Both bounds of the range are reachable and nothing falls outside it."""
    rng = random.Random(7)
    dist = IntegerDistribution(1, 4)
    samples = {dist.sample(rng) for _ in range(1000)}
    assert samples == {1, 2, 3, 4}


def test_integer_distribution_rejects_reversed_bounds() -> None:
    with pytest.raises(ValueError):
        IntegerDistribution(5, 1)


def test_uniform_distribution_within_bounds() -> None:
    rng = random.Random(3)
    dist = UniformDistribution(30.0, 60.0)
    assert all(30.0 <= dist.sample(rng) <= 60.0 for _ in range(500))


def test_categorical_weights_are_normalized() -> None:
    dist = CategoricalDistribution(["a", "b"], [1.0, 3.0])
    assert dist.weights == [0.25, 0.75]


def test_categorical_defaults_to_equal_weights() -> None:
    dist = CategoricalDistribution(["a", "b", "c", "d"])
    assert dist.weights == [0.25] * 4


def test_categorical_weight_mismatch_rejected() -> None:
    with pytest.raises(ValueError):
        CategoricalDistribution(["a", "b"], [1.0])


def test_categorical_empty_cannot_sample() -> None:
    with pytest.raises(ValueError):
        CategoricalDistribution().sample(random.Random(0))


def test_categorical_sample_many_length_and_membership() -> None:
    dist = CategoricalDistribution(["x", "y"])
    picks = dist.sample_many(random.Random(0), 25)
    assert len(picks) == 25
    assert set(picks) <= {"x", "y"}


def test_seeded_samples_reproduce() -> None:
    dist = IntegerDistribution(2, 6)
    first = [dist.sample(random.Random(99)) for _ in range(3)]
    second = [dist.sample(random.Random(99)) for _ in range(3)]
    assert first == second


def test_bernoulli_extremes() -> None:
    rng = random.Random(1)
    assert not any(BernoulliDistribution(0.0).sample(rng) for _ in range(100))
    assert all(BernoulliDistribution(1.0).sample(rng) for _ in range(100))
    assert BernoulliDistribution(1.0).sample(rng) is True
