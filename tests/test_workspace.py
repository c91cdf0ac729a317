import pytest

from gpart.workspace import NeighborPool


def test_consecutive_runs():
    pool = NeighborPool(nparts=8, size_max=1000, size=100)
    offsets = []
    previous = 0
    for request in (2, 5, 1, 3):
        offset = pool.get_next(request)
        assert offset == previous
        previous = pool.cpos
        offsets.append(offset)
    assert offsets == sorted(offsets)
    assert pool.cpos == 2 + 5 + 1 + 3
    assert pool.reallocs == 0


def test_request_capped_at_nparts():
    pool = NeighborPool(nparts=4, size_max=1000, size=100)
    first = pool.get_next(50)
    second = pool.get_next(1)
    assert first == 0
    assert second - first == pool.nparts


def test_reset():
    pool = NeighborPool(nparts=4, size_max=1000, size=100)
    pool.get_next(3)
    pool.get_next(3)
    pool.reset()
    assert pool.cpos == 0
    assert pool.get_next(2) == 0


def test_growth_when_exhausted():
    pool = NeighborPool(nparts=4, size_max=1000, size=10)
    for _ in range(3):
        pool.get_next(4)
    assert pool.reallocs == 1
    assert pool.size >= pool.cpos
    assert pool.size <= pool.size_max
    assert len(pool.slots) == pool.size


def test_growth_capped_by_size_max():
    pool = NeighborPool(nparts=4, size_max=15, size=10)
    for _ in range(3):
        pool.get_next(4)
    assert pool.size == pool.size_max
    assert len(pool.slots) == pool.size_max


def test_invalid_construction():
    with pytest.raises(ValueError):
        NeighborPool(nparts=0, size_max=10, size=10)
    with pytest.raises(ValueError):
        NeighborPool(nparts=2, size_max=10, size=-1)