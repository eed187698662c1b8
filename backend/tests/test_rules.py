from datetime import datetime, timedelta

from millionaire.services.games import rules

LIMIT = timedelta(minutes=35)
CREATED = datetime(2026, 1, 1, 12, 0, 0)
SOON = CREATED + timedelta(minutes=5)
LATE = CREATED + timedelta(hours=1)


def status(level=0, failed=False, finished_at=None, now=SOON):
    return rules.compute_status(level, failed, finished_at, CREATED, now, LIMIT)


def test_fresh_game_is_in_progress():
    assert status() == rules.IN_PROGRESS


def test_explicit_finish_without_failure_is_cash_out():
    assert status(level=3, finished_at=SOON) == rules.CASHED_OUT


def test_failed_game():
    assert status(level=3, failed=True, finished_at=SOON) == rules.FAIL


def test_level_past_top_is_won():
    assert status(level=15, finished_at=SOON) == rules.WON


def test_level_past_top_is_won_even_without_finish_time():
    assert status(level=15) == rules.WON


def test_elapsed_window_is_timeout():
    assert status(level=5, now=LATE) == rules.TIMEOUT


def test_timeout_outranks_failure():
    assert status(level=5, failed=True, finished_at=SOON, now=LATE) == rules.TIMEOUT


def test_window_boundary_is_still_open():
    assert status(now=CREATED + LIMIT) == rules.IN_PROGRESS


def test_seconds_left_never_negative():
    assert rules.seconds_left(CREATED, SOON, LIMIT) == 30 * 60
    assert rules.seconds_left(CREATED, LATE, LIMIT) == 0
