from datetime import datetime, timezone
from decimal import Decimal

from millionaire import db

ANSWER_KEYS = ('a', 'b', 'c', 'd')


def utcnow():
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    balance = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal(0))
    games = db.relationship('Game', back_populates='user', order_by='Game.created_at.desc()')

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'balance': int(self.balance or 0),
        }


class Question(db.Model):
    __tablename__ = 'question'
    id = db.Column(db.Integer, primary_key=True)
    level = db.Column(db.Integer, nullable=False, index=True)
    text = db.Column(db.Text, nullable=False)
    answer1 = db.Column(db.String(255), nullable=False)
    answer2 = db.Column(db.String(255), nullable=False)
    answer3 = db.Column(db.String(255), nullable=False)
    answer4 = db.Column(db.String(255), nullable=False)
    correct_index = db.Column(db.Integer, nullable=False, default=1)

    __table_args__ = (
        db.CheckConstraint('level >= 0 AND level <= 14', name='ck_question_level'),
        db.CheckConstraint('correct_index >= 1 AND correct_index <= 4', name='ck_question_correct_index'),
    )

    def answer(self, index):
        return getattr(self, f'answer{index}')

    def to_dict(self):
        return {
            'id': self.id,
            'level': self.level,
            'text': self.text,
            'answers': [self.answer(i) for i in range(1, 5)],
        }


class GameQuestion(db.Model):
    """One question drawn for one level of one game.

    Columns ``a``..``d`` hold which of the question's answers each key shows,
    so the same question can be presented in a different order per game.
    """

    __tablename__ = 'game_question'
    id = db.Column(db.Integer, primary_key=True)
    game_id = db.Column(db.Integer, db.ForeignKey('game.id'), nullable=False, index=True)
    question_id = db.Column(db.Integer, db.ForeignKey('question.id'), nullable=False)
    level = db.Column(db.Integer, nullable=False)
    a = db.Column(db.Integer, nullable=False)
    b = db.Column(db.Integer, nullable=False)
    c = db.Column(db.Integer, nullable=False)
    d = db.Column(db.Integer, nullable=False)
    help_hash = db.Column(db.JSON, nullable=False, default=dict)

    game = db.relationship('Game', back_populates='game_questions')
    question = db.relationship('Question')

    __table_args__ = (
        db.UniqueConstraint('game_id', 'level', name='uq_game_question_level'),
    )

    @property
    def text(self):
        return self.question.text

    def variants(self):
        return {key: self.question.answer(getattr(self, key)) for key in ANSWER_KEYS}

    @property
    def correct_answer_key(self):
        for key in ANSWER_KEYS:
            if getattr(self, key) == self.question.correct_index:
                return key
        return None

    @property
    def correct_answer(self):
        return self.variants()[self.correct_answer_key]

    def answer_correct(self, letter):
        return str(letter or '').strip().lower() == self.correct_answer_key

    def add_help(self, kind, payload):
        """Store ``payload`` under ``kind`` unless one is cached already."""
        cache = dict(self.help_hash or {})
        if kind not in cache:
            cache[kind] = payload
            # Reassign so the JSON column is flagged dirty
            self.help_hash = cache
        return cache[kind]

    def to_dict(self):
        return {
            'id': self.id,
            'level': self.level,
            'text': self.text,
            'variants': self.variants(),
            'help': dict(self.help_hash or {}),
        }


class Game(db.Model):
    __tablename__ = 'game'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False, index=True)
    current_level = db.Column(db.Integer, nullable=False, default=0)
    is_failed = db.Column(db.Boolean, nullable=False, default=False)
    finished_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    prize = db.Column(db.Numeric(12, 2), nullable=False, default=Decimal(0))
    fifty_fifty_used = db.Column(db.Boolean, nullable=False, default=False)
    audience_help_used = db.Column(db.Boolean, nullable=False, default=False)
    friend_call_used = db.Column(db.Boolean, nullable=False, default=False)
    version_id = db.Column(db.Integer, nullable=False)

    user = db.relationship('User', back_populates='games')
    game_questions = db.relationship(
        'GameQuestion',
        back_populates='game',
        order_by='GameQuestion.level',
        cascade='all, delete-orphan',
    )

    # Concurrent writers that both read the same version lose with StaleDataError
    __mapper_args__ = {'version_id_col': version_id}

    @property
    def help_used(self):
        return {
            kind for kind in ('fifty_fifty', 'audience_help', 'friend_call')
            if getattr(self, f'{kind}_used')
        }

    def to_dict(self):
        return {
            'id': self.id,
            'user_id': self.user_id,
            'current_level': self.current_level,
            'is_failed': bool(self.is_failed),
            'prize': int(self.prize or 0),
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'finished_at': self.finished_at.isoformat() if self.finished_at else None,
            'help_used': sorted(self.help_used),
        }
