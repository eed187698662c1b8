import os
import random
import sys
import pytest

# Ensure the backend root (containing the `millionaire` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from millionaire import create_app, db, socketio
from millionaire.models import User


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    GAME_TIME_LIMIT_SEC = 35 * 60
    PRIZES = [100, 200, 300, 500, 1000, 2000, 4000, 8000, 16000, 32000, 64000, 125000, 250000, 500000, 1000000]
    FIREPROOF_LEVELS = [4, 9, 14]
    GAME_RETRY_ATTEMPTS = 3
    FRIEND_CALL_ACCURACY = 0.8


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import millionaire.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')


@pytest.fixture()
def questions(flask_app):
    from millionaire.services.games.catalog import seed_questions
    return seed_questions(per_level=4, rng=random.Random(42))


@pytest.fixture()
def user(flask_app):
    u = User(username='player')
    db.session.add(u)
    db.session.commit()
    return u


@pytest.fixture()
def game(user, questions):
    from millionaire.services.games import engine
    return engine.create_game(user, rng=random.Random(7))


def wrong_key(game_question):
    return next(k for k in ('a', 'b', 'c', 'd') if k != game_question.correct_answer_key)
