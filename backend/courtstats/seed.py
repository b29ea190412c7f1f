"""Demo data for local development (``flask db-seed``)."""

from courtstats import db
from courtstats.models import Game, Player, User

DEMO_USERNAME = 'demo'

DEMO_PLAYERS = [
    {'name': 'Jordan Banks', 'instagram_handle': 'jbanks_hoops', 'position': 'PG', 'height_inches': 74, 'weight_lbs': 185},
    {'name': 'Marcus Reed', 'instagram_handle': 'mreed23', 'position': 'SF', 'height_inches': 79, 'weight_lbs': 215},
    {'name': 'Tyler Owens', 'instagram_handle': None, 'position': 'C', 'height_inches': 83, 'weight_lbs': 245},
]


def _shot(player_id, x, y, made, points, timestamp):
    return {
        'type': 'shot',
        'player_id': player_id,
        'location': {'x': x, 'y': y},
        'made': made,
        'points': points,
        'timestamp': timestamp,
    }


def seed_demo_data():
    user = User.query.filter_by(username=DEMO_USERNAME).first()
    if user is None:
        user = User(username=DEMO_USERNAME)
        user.set_password('password')
        db.session.add(user)
        db.session.flush()

    if Player.query.count():
        db.session.commit()
        return {'username': user.username, 'players': 0, 'games': 0}

    roster = [Player(created_by=user.id, overall_stats=[], all_time_shot_data=[], **fields) for fields in DEMO_PLAYERS]
    db.session.add_all(roster)
    db.session.flush()

    a, b, c = roster
    game = Game(
        game_type='3v3',
        status='finished',
        teams={'home': [a.id, c.id], 'away': [b.id]},
        final_score={'home': 21, 'away': 17},
        winner='home',
        events=[
            _shot(a.id, 12, 30, True, 2, '2024-01-01T18:00:05Z'),
            _shot(b.id, 40, 22, False, 3, '2024-01-01T18:00:31Z'),
            {'type': 'rebound', 'player_id': c.id, 'timestamp': '2024-01-01T18:00:33Z'},
            _shot(c.id, 5, 4, True, 2, '2024-01-01T18:00:40Z'),
            _shot(a.id, 44, 18, True, 3, '2024-01-01T18:01:02Z'),
        ],
    )
    game.players = roster
    db.session.add(game)
    db.session.commit()
    return {'username': user.username, 'players': len(roster), 'games': 1}
