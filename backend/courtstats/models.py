from courtstats import db, bcrypt
from flask_login import UserMixin
from bson import ObjectId
from datetime import date, datetime, timezone
from sqlalchemy import event
from sqlalchemy.engine import Engine
import sqlite3

# Column names exposed to clients under a different key
WIRE_NAMES = {'created_at': 'createdAt', 'updated_at': 'updatedAt'}

def new_object_id():
    return str(ObjectId())

@event.listens_for(Engine, 'connect')
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()

def _utcnow():
    return datetime.now(timezone.utc)

def serialize_columns(record, columns):
    """Serialize only the given columns so projected (load_only) rows stay unexpired."""
    data = {}
    for column in columns:
        value = getattr(record, column)
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        data[WIRE_NAMES.get(column, column)] = value
    return data

class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
        }

game_players = db.Table(
    'game_player',
    db.Column('game_id', db.String(24), db.ForeignKey('game.id', ondelete='CASCADE'), primary_key=True),
    db.Column('player_id', db.String(24), db.ForeignKey('player.id', ondelete='CASCADE'), primary_key=True),
)

class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    created_by = db.Column(db.Integer, db.ForeignKey('user.id'), nullable=False)
    name = db.Column(db.String(128), nullable=False, index=True)
    instagram_handle = db.Column(db.String(64), unique=True, nullable=True)
    profile_image_url = db.Column(db.String(512), nullable=True)
    bio = db.Column(db.Text, nullable=True)
    height_inches = db.Column(db.Integer, nullable=True)
    weight_lbs = db.Column(db.Integer, nullable=True)
    position = db.Column(db.String(32), nullable=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    city = db.Column(db.String(64), nullable=True)
    state = db.Column(db.String(64), nullable=True)
    # Maintained by stat aggregation, never by the update route
    overall_stats = db.Column(db.JSON, nullable=False, default=list)
    all_time_shot_data = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    def to_dict(self, fields=None):
        return serialize_columns(self, fields or self.__table__.columns.keys())

class Game(db.Model):
    """A game record. Written by the game-tracking service; read-only here."""
    __tablename__ = 'game'
    id = db.Column(db.String(24), primary_key=True, default=new_object_id)
    game_type = db.Column(db.String(32), nullable=True)
    status = db.Column(db.String(32), default='in_progress', index=True)  # in_progress, finished
    final_score = db.Column(db.JSON, nullable=True)
    teams = db.Column(db.JSON, nullable=True)
    winner = db.Column(db.String(64), nullable=True)
    # Ordered event log; shot events look like
    # {"type": "shot", "player_id", "location", "made", "points", "timestamp"}
    events = db.Column(db.JSON, nullable=False, default=list)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
    players = db.relationship(
        'Player',
        secondary=game_players,
        lazy='select',
        backref=db.backref('games', passive_deletes=True),
        passive_deletes=True,
    )

    @property
    def all_player_ids(self):
        return [p.id for p in self.players]

    def to_dict(self, fields=None):
        return serialize_columns(self, fields or self.__table__.columns.keys())
