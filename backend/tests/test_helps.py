import random

import pytest

from millionaire.services.games import helps

KEYS = ('a', 'b', 'c', 'd')


@pytest.mark.parametrize('seed', range(20))
def test_fifty_fifty_keeps_correct_key(seed):
    result = helps.fifty_fifty(KEYS, 'c', random.Random(seed))
    assert len(result) == 2
    assert 'c' in result
    assert len(set(result)) == 2


@pytest.mark.parametrize('seed', range(20))
def test_audience_shares_sum_to_hundred(seed):
    result = helps.audience_help(KEYS, 'b', random.Random(seed))
    assert set(result) == set(KEYS)
    assert sum(result.values()) == 100
    assert all(share >= 0 for share in result.values())


def test_audience_favours_correct_key_on_average():
    rng = random.Random(1)
    totals = dict.fromkeys(KEYS, 0)
    for _ in range(300):
        for key, share in helps.audience_help(KEYS, 'd', rng).items():
            totals[key] += share
    assert totals['d'] == max(totals.values())


def test_friend_call_names_a_key():
    message = helps.friend_call(KEYS, 'a', random.Random(3))
    assert message.split()[-1] in {'A', 'B', 'C', 'D'}


def test_reliable_friend_names_correct_key():
    message = helps.friend_call(KEYS, 'b', random.Random(3), accuracy=1.0)
    assert message.endswith('B')


def test_unreliable_friend_names_wrong_key():
    message = helps.friend_call(KEYS, 'b', random.Random(3), accuracy=0.0)
    assert not message.endswith('B')


def test_generate_dispatches_by_kind():
    rng = random.Random(5)
    assert len(helps.generate(helps.FIFTY_FIFTY, KEYS, 'a', rng)) == 2
    assert sum(helps.generate(helps.AUDIENCE_HELP, KEYS, 'a', rng).values()) == 100
    assert isinstance(helps.generate(helps.FRIEND_CALL, KEYS, 'a', rng), str)


def test_every_help_kind_has_a_generator():
    assert set(helps.GENERATORS) == set(helps.HELP_KINDS)
