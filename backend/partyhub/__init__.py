import random
import threading

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)

SEED_USERS = ['testuser1', 'testuser2', 'testuser3']
SEED_PIN = '1234'


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS')

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from partyhub.main import main
    flask_app.register_blueprint(main)

    from partyhub.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api/rooms')

    # Rooms, game states and timers are built per app and shared through the hub
    from partyhub.hub import GameHub
    from partyhub.services.registry import RoomRegistry
    from partyhub.services.rooms import RoomDirectory
    from partyhub.services.scheduler import AdvanceScheduler
    from partyhub.services.state_store import GameStateStore
    from partyhub.socketio_events import SocketIOTransport, register_socketio_handlers

    testing = flask_app.config.get('TESTING', False)
    lock = threading.RLock()
    registry = RoomRegistry(flask_app.logger)
    hub = GameHub(
        rooms=RoomDirectory(
            registry,
            temp_capacity=flask_app.config['TEMP_ROOM_CAPACITY'],
            permanent_capacity=flask_app.config['PERMANENT_ROOM_CAPACITY'],
        ),
        states=GameStateStore(),
        registry=registry,
        transport=SocketIOTransport(socketio),
        scheduler=AdvanceScheduler(
            socketio, flask_app, flask_app.logger, lock=lock,
            autostart=not testing or flask_app.config.get('ENABLE_SCHEDULER_IN_TESTS', False),
        ),
        config=flask_app.config,
        logger=flask_app.logger,
        rng=random.Random(),
        lock=lock,
    )
    flask_app.extensions['partyhub'] = hub
    register_socketio_handlers(socketio, hub)

    # Flask-Login user loader
    from partyhub.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            for username in SEED_USERS:
                user = User(username=username)
                user.set_pin(SEED_PIN)
                db.session.add(user)

            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
