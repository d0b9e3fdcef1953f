import numpy as np
import pytest

from periodic2d.datastructures import Rectangle
from periodic2d.errors import InvalidInput
from periodic2d.replication import neighbor_offsets, replicate


def test_first_ring_order():
    offs = neighbor_offsets(1)
    # E, NE, N, NW, W, SW, S, SE
    assert offs.tolist() == [
        [1, 0], [1, 1], [0, 1], [-1, 1],
        [-1, 0], [-1, -1], [0, -1], [1, -1],
    ]


def test_second_ring_adds_sixteen_unique_offsets():
    offs = neighbor_offsets(2)
    assert offs.shape == (24, 2)
    assert len({tuple(o) for o in offs.tolist()}) == 24
    assert np.array_equal(offs[:8], neighbor_offsets(1))
    assert np.all(np.max(np.abs(offs[8:]), axis=1) == 2)


def test_rings_must_be_positive():
    with pytest.raises(InvalidInput):
        neighbor_offsets(0)


def test_replicate_blocks_and_back_references():
    rect = Rectangle(1.0, 2.0, 1.0, 2.0)
    seeds = np.array([[1.25, 2.5], [1.75, 3.5]])
    ext = replicate(seeds, rect)

    assert len(ext) == 18
    assert ext.n_original == 2
    assert np.array_equal(ext.points[:2], seeds)
    assert ext.source_index.tolist() == [0, 1] * 9

    # E block
    assert np.allclose(ext.points[2:4], seeds + [1.0, 0.0])
    # NW block
    assert np.allclose(ext.points[8:10], seeds + [-1.0, 2.0])
    # SE block (last)
    assert np.allclose(ext.points[16:18], seeds + [1.0, -2.0])

    assert ext.offset_of(0) == (0.0, 0.0)
    assert ext.offset_of(17) == (1.0, -2.0)

    # every point is its original plus its offset
    assert np.allclose(ext.points, seeds[ext.source_index] + ext.offsets)


def test_replicate_two_rings_size():
    rect = Rectangle(0.0, 0.0, 3.0, 3.0)
    seeds = np.array([[1.0, 1.0], [2.0, 2.0], [0.5, 2.5]])
    ext = replicate(seeds, rect, rings=2)
    assert len(ext) == 25 * 3
    assert np.max(np.abs(ext.offsets)) == 6.0
