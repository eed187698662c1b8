from flask import Blueprint, request, jsonify
from millionaire import db
from millionaire.models import User, Game
from millionaire.services.games import engine

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Millionaire game server!'})


@main.route('/users/add', methods=['POST'])
def add_user():
    data = request.get_json(silent=True)
    if not data or not data.get('username'):
        return jsonify({'error': 'Missing username'}), 400

    if User.query.filter_by(username=data['username']).first():
        return jsonify({'error': 'Username already exists'}), 400

    user = User(username=data['username'])
    db.session.add(user)
    db.session.commit()

    return jsonify(user.to_dict()), 201


@main.route('/users/<int:user_id>')
def show_user(user_id):
    user = User.query.filter_by(id=user_id).first_or_404()
    payload = user.to_dict()
    payload['games'] = [
        dict(g.to_dict(), status=engine.status(g))
        for g in Game.query.filter_by(user_id=user.id).order_by(Game.created_at.desc())
    ]
    return jsonify(payload)
