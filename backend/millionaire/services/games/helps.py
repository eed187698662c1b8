import random
from typing import Dict, List, Sequence

FIFTY_FIFTY = 'fifty_fifty'
AUDIENCE_HELP = 'audience_help'
FRIEND_CALL = 'friend_call'

HELP_KINDS = (FIFTY_FIFTY, AUDIENCE_HELP, FRIEND_CALL)

FRIENDS = ['Alex', 'Sam', 'Jordan', 'Robin', 'Casey', 'Morgan', 'Taylor', 'Jamie']


def _wrong_keys(keys: Sequence[str], correct_key: str) -> List[str]:
    return [k for k in keys if k != correct_key]


def fifty_fifty(keys: Sequence[str], correct_key: str, rng: random.Random) -> List[str]:
    """Keep the correct key and one random wrong key."""
    return sorted([correct_key, rng.choice(_wrong_keys(keys, correct_key))])


def audience_help(keys: Sequence[str], correct_key: str, rng: random.Random) -> Dict[str, int]:
    """Simulated audience vote, in whole percents summing to 100.

    The correct key draws its weight from a higher range than the others, so
    it usually wins the vote but is not guaranteed to.
    """
    weights = {
        k: rng.randint(45, 90) if k == correct_key else rng.randint(1, 60)
        for k in keys
    }
    total = sum(weights.values())
    exact = {k: w * 100 / total for k, w in weights.items()}
    shares = {k: int(v) for k, v in exact.items()}

    # Hand out what flooring lost, largest fractional part first
    leftover = 100 - sum(shares.values())
    for k in sorted(keys, key=lambda key: exact[key] - shares[key], reverse=True)[:leftover]:
        shares[k] += 1
    return shares


def friend_call(keys: Sequence[str], correct_key: str, rng: random.Random,
                accuracy: float = 0.8) -> str:
    if rng.random() < accuracy:
        suggestion = correct_key
    else:
        suggestion = rng.choice(_wrong_keys(keys, correct_key))
    friend = rng.choice(FRIENDS)
    return f'{friend} thinks the answer is {suggestion.upper()}'


GENERATORS = {
    FIFTY_FIFTY: fifty_fifty,
    AUDIENCE_HELP: audience_help,
    FRIEND_CALL: friend_call,
}


def generate(kind: str, keys: Sequence[str], correct_key: str, rng: random.Random,
             friend_accuracy: float = 0.8):
    """Build the payload for ``kind``; callers validate ``kind`` first."""
    if kind == FRIEND_CALL:
        return friend_call(keys, correct_key, rng, accuracy=friend_accuracy)
    return GENERATORS[kind](keys, correct_key, rng)
