from flask import Blueprint, jsonify, request, current_app
from millionaire import db
from millionaire.models import Game, User, utcnow
from millionaire.services.games import engine
from millionaire.services.games.errors import GameError
from millionaire.services.games.rules import IN_PROGRESS
from millionaire.socketio_events import notify_state


games = Blueprint('games', __name__)


def game_state(game: Game) -> dict:
    now = utcnow()
    payload = game.to_dict()
    payload['status'] = engine.status(game, now)
    payload['finished'] = payload['status'] != IN_PROGRESS
    payload['previous_level'] = engine.previous_level(game)
    payload['time_left'] = engine.time_left(game, now)
    current = engine.current_question(game, now)
    payload['current_question'] = current.to_dict() if current else None
    payload['ladder'] = engine.ladder().to_list()
    return payload


@games.errorhandler(GameError)
def handle_game_error(exc):
    db.session.rollback()
    current_app.logger.info(f"[error] {exc.__class__.__name__}: {exc}")
    return jsonify(exc.to_dict()), exc.status_code


@games.route('', methods=['POST'])
def create_game():
    data = request.get_json(silent=True) or {}
    user_id = data.get('user_id')
    if not user_id:
        return jsonify({'error': 'user_id is required'}), 400

    user = User.query.filter_by(id=user_id).first_or_404()
    game = engine.create_game(user)
    return jsonify(game_state(game)), 201


@games.route('/<int:game_id>', methods=['GET'])
def show_game(game_id):
    game = Game.query.filter_by(id=game_id).first_or_404()
    return jsonify(game_state(game))


@games.route('/<int:game_id>/answer', methods=['PUT'])
def answer(game_id):
    data = request.get_json(silent=True) or {}
    letter = data.get('letter')
    if not letter:
        return jsonify({'error': 'letter is required'}), 400

    game = Game.query.filter_by(id=game_id).first_or_404()
    correct = engine.answer(game, letter)
    notify_state(game)
    return jsonify({'correct': correct, 'game': game_state(game)})


@games.route('/<int:game_id>/take_money', methods=['PUT'])
def take_money(game_id):
    game = Game.query.filter_by(id=game_id).first_or_404()
    engine.take_money(game)
    notify_state(game)
    return jsonify(game_state(game))


@games.route('/<int:game_id>/help', methods=['PUT'])
def use_help(game_id):
    data = request.get_json(silent=True) or {}
    help_type = data.get('help_type')
    if not help_type:
        return jsonify({'error': 'help_type is required'}), 400

    game = Game.query.filter_by(id=game_id).first_or_404()
    payload = engine.use_help(game, help_type)
    notify_state(game)
    return jsonify({'help': payload, 'game': game_state(game)})
