import random

import pytest

from gpart.util import (
    SIGERR,
    SIGMEM,
    Status,
    argmax2,
    argmax2_nrm,
    argmax_nrm,
    argmax_strided,
    init_random,
    status_from_signal,
)


def test_status_from_signal():
    assert status_from_signal(0) is Status.OK
    assert status_from_signal(SIGMEM) is Status.ERROR_MEMORY
    assert status_from_signal(SIGERR) is Status.ERROR


def test_init_random_default_seed():
    assert init_random(-1).random() == init_random(4321).random()


def test_init_random_is_reproducible():
    first = [init_random(7).random() for _ in range(1)]
    second = [init_random(7).random() for _ in range(1)]
    assert first == second


def test_argmax_nrm_first_on_ties():
    assert argmax_nrm([2, 1, 2], [1.0, 2.0, 1.0]) == 0


def test_argmax_nrm_invariant():
    rng = random.Random(3)
    for _ in range(50):
        n = rng.randint(1, 10)
        x = [rng.randint(-5, 5) for _ in range(n)]
        y = [rng.choice([0.5, 1.0, 2.0]) for _ in range(n)]
        i = argmax_nrm(x, y)
        products = [a * b for a, b in zip(x, y)]
        assert products[i] == max(products)
        assert all(p < products[i] for p in products[:i])


def test_argmax_strided_picks_from_stride():
    assert argmax_strided([1, 9, 5, 2, 8, 7], 3, 2) == 2
    assert argmax_strided([1, 9, 5, 2, 8, 7], 3, 2, ) == argmax_strided([1, 5, 8], 3, 1)


def test_argmax_strided_offset_slice():
    data = [1, 9, 5, 2, 8, 7]
    assert argmax_strided(data[1:], 3, 2) == 0


def test_argmax_strided_errors():
    with pytest.raises(ValueError):
        argmax_strided([1, 2], 0, 1)
    with pytest.raises(ValueError):
        argmax_strided([1, 2], 3, 1)


def test_argmax2_second_largest():
    assert argmax2([3, 1, 2]) == 2


def test_argmax2_invariant_distinct():
    rng = random.Random(11)
    for _ in range(50):
        values = rng.sample(range(100), rng.randint(2, 12))
        i = argmax2(values)
        assert values[i] == sorted(values)[-2]


def test_argmax2_nrm():
    assert argmax2_nrm([1, 4, 3], [1.0, 1.0, 2.0]) == 1


def test_argmax_errors():
    with pytest.raises(ValueError):
        argmax_nrm([], [])
    with pytest.raises(ValueError):
        argmax_nrm([1, 2], [1.0])
    with pytest.raises(ValueError):
        argmax2([1])
    with pytest.raises(ValueError):
        argmax2_nrm([1], [1.0])