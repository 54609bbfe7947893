from itertools import product

import pytest

from absurdle.feedback import (entropy_loss, feedback, is_solved, partition_candidates, pattern_to_string,
                               solved_pattern, string_to_pattern)

WORDS = ['spell', 'heels', 'panel', 'hands', 'peels', 'point', 'strap', 'apple', 'pivot', 'aaabb', 'xxabx']


def test_feedback_basic():
    assert feedback('wxyz', 'abcd') == '0000'
    assert feedback('abce', 'abcd') == '2220'
    assert feedback('abcd', 'abcd') == '2222'


@pytest.mark.parametrize('guess, target, expected', [
    ('heels', 'spell', '00221'),
    ('hands', 'panel', '02200'),
    ('peels', 'panel', '21010'),
    ('strap', 'point', '01001'),
    ('aaabb', 'xxabx', '00220'),
])
def test_feedback_duplicates(guess, target, expected):
    assert feedback(guess, target) == expected


def test_feedback_idempotent():
    assert feedback('peels', 'panel') == feedback('peels', 'panel')


def test_feedback_letter_counts():
    for guess, target in product(WORDS, repeat=2):
        pattern = feedback(guess, target)
        assert pattern.count('2') == sum(1 for a, b in zip(guess, target) if a == b)
        for letter in set(guess):
            marked = sum(1 for c, p in zip(guess, pattern) if c == letter and p != '0')
            assert marked <= target.count(letter)


def test_feedback_length_mismatch():
    with pytest.raises(ValueError):
        feedback('abc', 'abcd')


def test_pattern_conversion():
    assert string_to_pattern('2220') == 78
    assert pattern_to_string(78, 4) == '2220'
    assert pattern_to_string(0, 3) == '000'
    assert solved_pattern(4) == string_to_pattern('2222')
    assert is_solved('2222')
    assert not is_solved('2220')
    with pytest.raises(ValueError):
        string_to_pattern('0130')
    with pytest.raises(ValueError):
        string_to_pattern('')


def test_entropy_loss():
    assert entropy_loss('11') == -2011
    assert entropy_loss('22') == -20022
    assert entropy_loss('2220') > entropy_loss('2222')


def test_partition_candidates():
    parts = partition_candidates('spell', WORDS)
    assert list(parts) == sorted(parts)
    members = [w for group in parts.values() for w in group]
    assert sorted(members) == sorted(WORDS)
    assert parts['22222'] == ['spell']
