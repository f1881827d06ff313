import random

import pytest

from falling_block_rl.game import BagQueue, PieceKind
from falling_block_rl.game.randomizer import process_rng


def test_aligned_windows_hold_each_kind_once():
    queue = BagQueue(random.Random(1234))
    draws = [queue.next() for _ in range(70)]
    for start in range(0, 70, 7):
        assert sorted(draws[start:start + 7]) == sorted(PieceKind)


def test_peek_does_not_consume():
    queue = BagQueue(random.Random(5))
    preview = queue.peek(4)
    assert len(preview) == 4
    assert queue.next() == preview[0]
    assert queue.peek(3) == preview[1:]


def test_peek_tops_up_with_whole_bags():
    queue = BagQueue(random.Random(9))
    draws = [queue.next() for _ in range(5)]
    assert len(queue) == 2
    assert len(queue.peek(4)) == 4
    assert len(queue) == 9
    draws += [queue.next() for _ in range(9)]
    assert sorted(draws[:7]) == sorted(PieceKind)
    assert sorted(draws[7:14]) == sorted(PieceKind)


def test_refill_happens_below_lookahead_threshold():
    queue = BagQueue(random.Random(2))
    queue.refill()
    for _ in range(4):
        queue.next()
    assert len(queue) == 3
    queue.next()
    assert len(queue) == 2
    queue.next()
    assert len(queue) == 8


def test_negative_peek_rejected():
    with pytest.raises(ValueError):
        BagQueue(random.Random(0)).peek(-1)


def test_same_seed_same_sequence():
    a = BagQueue(random.Random(42))
    b = BagQueue(random.Random(42))
    assert [a.next() for _ in range(21)] == [b.next() for _ in range(21)]


def test_unseeded_queues_share_process_generator():
    assert BagQueue().rng is process_rng()
    assert BagQueue().rng is BagQueue().rng
