import numpy as np
import pytest

from periodic2d.config import TessellationSettings
from periodic2d.datastructures import Rectangle
from periodic2d.errors import InvalidInput
from periodic2d.seeds import make_rng, provide_seeds, validate_count


def test_explicit_seeds_are_echoed():
    rect = Rectangle(0.0, 0.0, 10.0, 10.0)
    seeds = np.array([[1.0, 2.0], [9.5, 0.25], [3.0, 3.0]])
    out = provide_seeds(rect, seeds, count=99)

    assert out.shape == (3, 2)
    assert np.array_equal(out, seeds)
    # copy, not a view of the caller's array
    out[0, 0] = -1.0
    assert seeds[0, 0] == 1.0


def test_explicit_seed_list_of_ints():
    rect = Rectangle(0.0, 0.0, 4.0, 4.0)
    out = provide_seeds(rect, [[1, 1], [3, 2]])
    assert out.dtype == np.float64
    assert out.tolist() == [[1.0, 1.0], [3.0, 2.0]]


def test_default_count_is_ten_and_inside_rectangle():
    rect = Rectangle(-1.0, 4.0, 5.0, 3.5)
    out = provide_seeds(rect, rng=np.random.default_rng(1))

    assert out.shape == (10, 2)
    assert np.all(rect.contains(out))


def test_count_from_settings():
    rect = Rectangle(0.0, 0.0, 1.0, 1.0)
    settings = TessellationSettings(default_seed_count=4, random_seed=3)
    a = provide_seeds(rect, settings=settings)
    b = provide_seeds(rect, settings=settings)

    assert len(a) == 4
    assert np.array_equal(a, b)


def test_int_rng_is_reproducible():
    rect = Rectangle(0.0, 0.0, 2.0, 1.0)
    a = provide_seeds(rect, count=7, rng=42)
    b = provide_seeds(rect, count=7, rng=42)
    assert np.array_equal(a, b)


def test_make_rng_passes_generator_through():
    g = np.random.default_rng(0)
    assert make_rng(g) is g


@pytest.mark.parametrize("seeds", [
    [],
    np.zeros((0, 2)),
    [[1.0, 2.0, 3.0]],
    [1.0, 2.0],
    [[1.0, np.nan]],
    [[np.inf, 0.0]],
    [["a", "b"]],
])
def test_bad_seeds_rejected(seeds):
    rect = Rectangle(0.0, 0.0, 1.0, 1.0)
    with pytest.raises(InvalidInput):
        provide_seeds(rect, seeds)


@pytest.mark.parametrize("count", [0, -3, 2.5, float("inf"), float("nan"), True, "3", None])
def test_bad_counts_rejected(count):
    with pytest.raises(InvalidInput):
        validate_count(count)


def test_integral_float_count_accepted():
    assert validate_count(4.0) == 4
    assert validate_count(np.int64(6)) == 6


def test_count_zero_rejected_by_provider():
    rect = Rectangle(0.0, 0.0, 1.0, 1.0)
    with pytest.raises(InvalidInput):
        provide_seeds(rect, count=0)
