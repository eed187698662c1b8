import random
from typing import List

from millionaire import db
from millionaire.models import Question
from .errors import CatalogExhausted
from .ladder import LEVELS


def draw_questions() -> List[Question]:
    """Pick one random question for every level, ordered by level."""
    drawn = []
    for level in LEVELS:
        question = (
            Question.query.filter_by(level=level)
            .order_by(db.func.random())
            .first()
        )
        if question is None:
            raise CatalogExhausted(f'No questions available for level {level}')
        drawn.append(question)
    return drawn


def seed_questions(per_level: int = 4, rng: random.Random = None) -> int:
    """Fill the catalog with arithmetic questions for local play and tests.

    The correct answer always goes into ``answer1``; games shuffle the keys.
    """
    rng = rng or random.Random()
    created = 0
    for level in LEVELS:
        for n in range(per_level):
            left = rng.randint(1, 10 * (level + 1))
            right = rng.randint(1, 10 * (level + 1)) + n
            total = left + right
            wrong = rng.sample([total + delta for delta in (-11, -2, -1, 1, 2, 10) if total + delta >= 0], 3)
            db.session.add(Question(
                level=level,
                text=f'How much is {left} + {right}?',
                answer1=str(total),
                answer2=str(wrong[0]),
                answer3=str(wrong[1]),
                answer4=str(wrong[2]),
                correct_index=1,
            ))
            created += 1
    db.session.commit()
    return created
