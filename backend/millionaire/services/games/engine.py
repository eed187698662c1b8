"""Game engine: the single state machine driving one ladder game.

Every mutation re-reads the game row under ``SELECT ... FOR UPDATE`` and
commits its changes, including the balance credit on finalization, in one
transaction. Databases without row locks fall back to the mapper's version
counter: the losing writer gets ``StaleDataError`` and the whole operation is
replayed against the fresh row. Either way the loser then finds the game
finished or on a later level than the caller saw, and changes nothing.
"""

import random
from datetime import timedelta
from functools import wraps

from flask import current_app
from sqlalchemy.orm.exc import StaleDataError

from millionaire import db
from millionaire.models import ANSWER_KEYS, Game, GameQuestion, User, utcnow
from millionaire.services.balance import credit_balance
from . import helps
from .catalog import draw_questions
from .errors import (
    ConcurrentModification,
    DuplicateActiveGame,
    GameAlreadyFinished,
    HelpAlreadyUsed,
    InvalidHelpKind,
)
from .ladder import MAX_LEVEL, PrizeLadder
from .rules import IN_PROGRESS, compute_status, seconds_left, time_expired

_rng = random.Random()


def ladder() -> PrizeLadder:
    return PrizeLadder.from_config(current_app.config)


def time_limit() -> timedelta:
    return timedelta(seconds=int(current_app.config.get('GAME_TIME_LIMIT_SEC', 2100)))


# ---- Queries ----

def status(game: Game, now=None) -> str:
    return compute_status(
        game.current_level,
        bool(game.is_failed),
        game.finished_at,
        game.created_at,
        now or utcnow(),
        time_limit(),
    )


def is_finished(game: Game, now=None) -> bool:
    return status(game, now) != IN_PROGRESS


def previous_level(game: Game) -> int:
    return game.current_level - 1


def current_question(game: Game, now=None):
    if is_finished(game, now):
        return None
    for game_question in game.game_questions:
        if game_question.level == game.current_level:
            return game_question
    return None


def time_left(game: Game, now=None) -> int:
    return seconds_left(game.created_at, now or utcnow(), time_limit())


def find_active_game(user: User):
    return (
        Game.query.filter_by(user_id=user.id, finished_at=None)
        .order_by(Game.created_at.desc())
        .first()
    )


# ---- Transaction helpers ----

def _mutation(fn):
    """Replay ``fn`` from a fresh read when another writer won the race.

    ``fn`` receives ``seen_level``, the level the caller was looking at before
    any lock or retry. A replay that finds the game on another level must not
    act on a question the caller never saw.
    """

    @wraps(fn)
    def wrapper(game, *args, **kwargs):
        attempts = max(1, int(current_app.config.get('GAME_RETRY_ATTEMPTS', 3)))
        game_id = game.id
        seen_level = game.current_level
        for attempt in range(1, attempts + 1):
            try:
                return fn(game, *args, seen_level=seen_level, **kwargs)
            except StaleDataError:
                db.session.rollback()
                current_app.logger.warning(f"[retry] game={game_id} op={fn.__name__} attempt={attempt}")
        raise ConcurrentModification(game_id=game_id)

    return wrapper


def _lock(game: Game) -> Game:
    # Identity map hands back the caller's own instance, refreshed
    return (
        Game.query.filter_by(id=game.id)
        .with_for_update()
        .populate_existing()
        .one()
    )


def _finish(game: Game, prize, now, failed=False) -> None:
    game.is_failed = bool(game.is_failed) or failed
    game.finished_at = now
    game.prize = prize
    credit_balance(game.user_id, prize)


def _expire(game: Game, now) -> None:
    _finish(game, ladder().fireproof_prize(previous_level(game)), now, failed=True)


def _commit_finish(game: Game, now) -> None:
    db.session.commit()
    current_app.logger.info(
        f"[finish] game={game.id} status={status(game, now)} level={game.current_level} prize={game.prize}"
    )


def _level_moved(game: Game, seen_level: int, op: str) -> bool:
    if game.current_level == seen_level:
        return False
    current_app.logger.warning(
        f"[{op}-ignored] game={game.id} seen_level={seen_level} level={game.current_level}"
    )
    return True


def _reject_unless_in_progress(game: Game, now) -> None:
    if status(game, now) == IN_PROGRESS:
        return
    if game.finished_at is None:
        # Window ran out since the last request; close it before refusing
        _expire(game, now)
        _commit_finish(game, now)
    current_app.logger.warning(f"[rejected] game={game.id} status={status(game, now)}")
    raise GameAlreadyFinished(game_id=game.id)


# ---- Operations ----

def create_game(user: User, now=None, rng: random.Random = None) -> Game:
    """Start a new game for ``user`` with one question bound per level."""
    now = now or utcnow()
    rng = rng or _rng

    stale = find_active_game(user)
    if stale is not None:
        close_expired_game(stale, now=now)

    # Serialize concurrent creates for the same user
    User.query.filter_by(id=user.id).with_for_update().one()
    active = find_active_game(user)
    if active is not None:
        active_id, user_id = active.id, user.id
        db.session.rollback()
        current_app.logger.warning(f"[create-rejected] user={user_id} active_game={active_id}")
        raise DuplicateActiveGame(game_id=active_id)

    game = Game(user_id=user.id, created_at=now)
    for question in draw_questions():
        order = [1, 2, 3, 4]
        rng.shuffle(order)
        game.game_questions.append(GameQuestion(
            question=question,
            level=question.level,
            **dict(zip(ANSWER_KEYS, order)),
        ))
    db.session.add(game)
    db.session.commit()
    current_app.logger.info(f"[create] game={game.id} user={user.id}")
    return game


@_mutation
def answer(game: Game, submitted_key, now=None, seen_level=None) -> bool:
    """Answer the current question; True only for a correct, in-time answer."""
    now = now or utcnow()
    game = _lock(game)

    if game.finished_at is not None or game.current_level > MAX_LEVEL:
        current_app.logger.warning(f"[answer-ignored] game={game.id} already finished")
        return False

    # A duplicate submission that lost the race was meant for an earlier question
    if _level_moved(game, seen_level, 'answer'):
        return False

    if time_expired(game.created_at, now, time_limit()):
        _expire(game, now)
        _commit_finish(game, now)
        return False

    game_question = current_question(game, now)
    correct = game_question.answer_correct(submitted_key)
    current_app.logger.info(f"[answer] game={game.id} level={game.current_level} correct={correct}")

    if not correct:
        _finish(game, ladder().fireproof_prize(previous_level(game)), now, failed=True)
        _commit_finish(game, now)
        return False

    if game.current_level == MAX_LEVEL:
        game.current_level = MAX_LEVEL + 1
        _finish(game, ladder().top_prize, now)
        _commit_finish(game, now)
    else:
        game.current_level += 1
        db.session.commit()
    return True


@_mutation
def take_money(game: Game, now=None, seen_level=None) -> Game:
    now = now or utcnow()
    game = _lock(game)
    _reject_unless_in_progress(game, now)
    if _level_moved(game, seen_level, 'take-money'):
        raise ConcurrentModification(game_id=game.id)

    _finish(game, ladder().prize_at(previous_level(game)), now)
    _commit_finish(game, now)
    return game


@_mutation
def use_help(game: Game, kind, now=None, rng: random.Random = None, seen_level=None):
    """Spend one help on the current question and return its payload."""
    if kind not in helps.HELP_KINDS:
        raise InvalidHelpKind(f'Unknown help type: {kind}', game_id=game.id)

    now = now or utcnow()
    game = _lock(game)
    if kind in game.help_used:
        raise HelpAlreadyUsed(f'{kind} has already been used in this game', game_id=game.id)
    _reject_unless_in_progress(game, now)
    if _level_moved(game, seen_level, 'help'):
        raise ConcurrentModification(game_id=game.id)

    game_question = current_question(game, now)
    setattr(game, f'{kind}_used', True)
    payload = (game_question.help_hash or {}).get(kind)
    if payload is None:
        payload = game_question.add_help(kind, helps.generate(
            kind,
            ANSWER_KEYS,
            game_question.correct_answer_key,
            rng or _rng,
            friend_accuracy=float(current_app.config.get('FRIEND_CALL_ACCURACY', 0.8)),
        ))
    db.session.commit()
    current_app.logger.info(f"[help] game={game.id} level={game.current_level} kind={kind}")
    return payload


@_mutation
def close_expired_game(game: Game, now=None, seen_level=None) -> bool:
    """Finalize a game whose time ran out without a further answer."""
    now = now or utcnow()
    game = _lock(game)
    if game.finished_at is not None or not time_expired(game.created_at, now, time_limit()):
        return False
    _expire(game, now)
    _commit_finish(game, now)
    return True
