from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from millionaire.routes import main
    flask_app.register_blueprint(main)

    from millionaire.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    # Register Socket.IO event handlers against the initialized socketio instance
    from millionaire.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    @click.command('db-reset')
    @click.option('--per-level', default=4, show_default=True, help='Questions to seed per level.')
    def db_reset_command(per_level):
        """Drops, recreates, and seeds the database."""
        from millionaire.models import User
        from millionaire.services.games.catalog import seed_questions
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            for username in ["testuser1", "testuser2", "testuser3"]:
                db.session.add(User(username=username))
            db.session.commit()

            created = seed_questions(per_level)
        click.echo(f'Database has been reset and seeded with {created} questions!')

    @click.command('seed-questions')
    @click.option('--per-level', default=4, show_default=True, help='Questions to seed per level.')
    def seed_questions_command(per_level):
        """Adds generated questions to every level of the catalog."""
        from millionaire.services.games.catalog import seed_questions
        with flask_app.app_context():
            created = seed_questions(per_level)
        click.echo(f'Seeded {created} questions.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(seed_questions_command)

    return flask_app
