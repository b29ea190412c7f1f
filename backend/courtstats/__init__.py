from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()

def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper())

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=flask_app.config.get('CORS_ORIGINS', []))

    # Import and register blueprints here
    from courtstats.main import main
    flask_app.register_blueprint(main)

    from courtstats.api.players import players
    flask_app.register_blueprint(players, url_prefix='/api/players')

    from courtstats.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'message': 'Authentication required'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates all tables."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    @click.command('db-seed')
    def db_seed_command():
        """Seeds a demo user, a few players and one finished game."""
        from courtstats.seed import seed_demo_data
        with flask_app.app_context():
            summary = seed_demo_data()
            print(f"Seeded user={summary['username']} players={summary['players']} games={summary['games']}")

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(db_seed_command)

    return flask_app
