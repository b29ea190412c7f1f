import os
import sys
from datetime import datetime, timedelta, timezone
import pytest

# Ensure the backend root (containing the `courtstats` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from courtstats import create_app, db


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    BCRYPT_LOG_ROUNDS = 4
    LOG_LEVEL = 'DEBUG'
    CORS_ORIGINS = ['http://localhost:5173']


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import courtstats.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def auth_client(flask_app):
    test_client = flask_app.test_client()
    res = test_client.post('/register', json={'username': 'coach', 'password': 'hunter2'})
    assert res.status_code == 201
    test_client.user_id = res.get_json()['user']['id']
    return test_client


@pytest.fixture()
def owner(flask_app):
    from courtstats.models import User
    user = User(username='owner')
    user.set_password('password')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture()
def make_player(owner):
    from courtstats.models import Player

    def _make(name, **fields):
        fields.setdefault('overall_stats', [])
        fields.setdefault('all_time_shot_data', [])
        player = Player(name=name, created_by=owner.id, **fields)
        db.session.add(player)
        db.session.commit()
        return player

    return _make


@pytest.fixture()
def make_game(flask_app):
    from courtstats.models import Game
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    counter = {'n': 0}

    def _make(players, status='finished', events=None, **fields):
        # Strictly increasing creation times keep "newest first" deterministic
        counter['n'] += 1
        fields.setdefault('created_at', base + timedelta(hours=counter['n']))
        game = Game(status=status, events=events or [], **fields)
        game.players = list(players)
        db.session.add(game)
        db.session.commit()
        return game

    return _make


def shot(player_id, made=True, points=2, location=None, timestamp='2024-01-01T18:00:00Z'):
    return {
        'type': 'shot',
        'player_id': player_id,
        'location': location or {'x': 10, 'y': 20},
        'made': made,
        'points': points,
        'timestamp': timestamp,
    }
