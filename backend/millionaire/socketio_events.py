from flask_socketio import join_room, leave_room, emit
from millionaire import socketio, db
from millionaire.models import Game
from millionaire.services.games import engine


def _room(game_id) -> str:
    return f"game:{game_id}"


def _game_id(data):
    try:
        return int((data or {}).get('game_id'))
    except (TypeError, ValueError):
        return None


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_game(data):
    game_id = _game_id(data)
    if game_id is None:
        emit('error', {'message': 'game_id is required'})
        return
    game = db.session.get(Game, game_id)
    if game is None:
        emit('error', {'message': 'Game not found'})
        return
    room = _room(game_id)
    join_room(room)
    emit('joined', {'room': room, 'status': engine.status(game)})


def handle_leave_game(data):
    game_id = _game_id(data)
    if game_id is None:
        emit('error', {'message': 'game_id is required'})
        return
    room = _room(game_id)
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def notify_state(game: Game) -> None:
    """Tell everyone watching ``game`` that its state changed."""
    socketio.emit(
        'state_update',
        {'game_id': game.id, 'status': engine.status(game), 'current_level': game.current_level},
        to=_room(game.id),
        namespace='/ws',
    )


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_game', handle_join_game, namespace='/ws')
    socketio.on_event('leave_game', handle_leave_game, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
