import numpy as np
import pytest

from absurdle.shortlist import RandomShortlist, ShortlistPolicy, TopScoreShortlist


def test_size_must_be_positive():
    with pytest.raises(ValueError):
        TopScoreShortlist(0)
    with pytest.raises(ValueError):
        RandomShortlist(-1)


def test_base_policy_is_abstract():
    with pytest.raises(NotImplementedError):
        ShortlistPolicy(3).select(np.arange(10))


def test_top_score():
    assert TopScoreShortlist(3).select(np.arange(10, 0, -1)).tolist() == [10, 9, 8]
    assert TopScoreShortlist(30).select(np.arange(5)).tolist() == [0, 1, 2, 3, 4]


def test_random_sample():
    ranked = np.arange(100, 200)
    picked = RandomShortlist(5, seed=1).select(ranked)
    assert len(picked) == 5
    assert picked.tolist() == sorted(picked.tolist())
    assert set(picked.tolist()) <= set(ranked.tolist())
    assert picked.tolist() == RandomShortlist(5, seed=1).select(ranked).tolist()
    assert RandomShortlist(50).select(np.arange(3)).tolist() == [0, 1, 2]
