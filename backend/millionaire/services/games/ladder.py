from decimal import Decimal
from typing import Iterable, List

MAX_LEVEL = 14
LEVELS = tuple(range(MAX_LEVEL + 1))

DEFAULT_PRIZES = (
    100, 200, 300, 500, 1000,
    2000, 4000, 8000, 16000, 32000,
    64000, 125000, 250000, 500000, 1000000,
)
DEFAULT_FIREPROOF_LEVELS = (4, 9, 14)


class PrizeLadder:
    """Payout table indexed by level plus the fireproof floor policy.

    ``prize_at`` is the raw lookup used when the player cashes out.
    ``fireproof_prize`` is the floor applied when the game is lost, either
    by a wrong answer or by running out of time.
    """

    def __init__(self, prizes: Iterable = DEFAULT_PRIZES,
                 fireproof_levels: Iterable[int] = DEFAULT_FIREPROOF_LEVELS):
        self.prizes: List[Decimal] = [Decimal(p) for p in prizes]
        self.fireproof_levels = sorted(set(int(lvl) for lvl in fireproof_levels))

        if len(self.prizes) != MAX_LEVEL + 1:
            raise ValueError(f'Prize ladder needs {MAX_LEVEL + 1} payouts, got {len(self.prizes)}')
        if any(low >= high for low, high in zip(self.prizes, self.prizes[1:])):
            raise ValueError('Prize ladder payouts must be strictly increasing')
        if any(lvl < 0 or lvl > MAX_LEVEL for lvl in self.fireproof_levels):
            raise ValueError(f'Fireproof levels must lie within 0..{MAX_LEVEL}')

    @classmethod
    def from_config(cls, config) -> 'PrizeLadder':
        return cls(
            config.get('PRIZES', DEFAULT_PRIZES),
            config.get('FIREPROOF_LEVELS', DEFAULT_FIREPROOF_LEVELS),
        )

    @property
    def top_prize(self) -> Decimal:
        return self.prizes[MAX_LEVEL]

    def prize_at(self, level: int) -> Decimal:
        if level < 0:
            return Decimal(0)
        return self.prizes[min(level, MAX_LEVEL)]

    def fireproof_prize(self, level: int) -> Decimal:
        reached = [lvl for lvl in self.fireproof_levels if lvl <= level]
        if not reached:
            return Decimal(0)
        return self.prizes[reached[-1]]

    def to_list(self):
        return [
            {'level': lvl, 'prize': int(prize), 'fireproof': lvl in self.fireproof_levels}
            for lvl, prize in enumerate(self.prizes)
        ]
