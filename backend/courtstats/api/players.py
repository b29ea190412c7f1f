from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import load_only
import math

from courtstats import db
from courtstats.models import Game, Player, game_players
from courtstats.schemas import PlayerCreate, PlayerUpdate
from courtstats.services.players.params import (
    escape_like,
    normalize_object_id,
    parse_paging,
    strip_protected_fields,
)
from courtstats.services.players.shots import extract_player_shots, extract_shots_from_games


players = Blueprint('players', __name__)

SEARCH_LIMIT = 20
RECENT_GAMES_LIMIT = 10

SUMMARY_FIELDS = (
    'id', 'name', 'instagram_handle', 'profile_image_url', 'position',
    'overall_stats', 'height_inches', 'weight_lbs',
)
RECENT_GAME_FIELDS = ('id', 'game_type', 'status', 'final_score', 'teams', 'winner', 'created_at')


def _projection(model, fields):
    return load_only(*[getattr(model, f) for f in fields if f != 'id'])


def _server_error(tag: str, message: str):
    db.session.rollback()
    current_app.logger.exception(f"[{tag}] {message}")
    return jsonify({'message': message}), 500


@players.route('/', methods=['POST'])
@login_required
def create_player():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    name = data.get('name')
    if not name or (isinstance(name, str) and not name.strip()):
        return jsonify({'message': 'Player name is required'}), 400

    try:
        fields = PlayerCreate.model_validate(data).model_dump()
        new_player = Player(
            created_by=current_user.id,
            overall_stats=[],
            all_time_shot_data=[],
            **fields,
        )
        db.session.add(new_player)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        current_app.logger.warning(f"[player_create] duplicate value for user={current_user.id}")
        return jsonify({'message': 'Error creating player: A player with that value already exists.'}), 400
    except Exception:
        return _server_error('player_create', 'Server error during player creation')

    current_app.logger.info(f"[player_create] player={new_player.id} by user={current_user.id}")
    return jsonify(new_player.to_dict()), 201


@players.route('/<string:player_id>', methods=['PUT', 'PATCH'])
def update_player(player_id):
    player_id = normalize_object_id(player_id)
    if player_id is None:
        return jsonify({'message': 'Invalid player ID format'}), 400

    data = request.get_json(silent=True)
    updates = strip_protected_fields(data if isinstance(data, dict) else {})

    try:
        player = db.session.get(Player, player_id)
        if player is None:
            return jsonify({'message': 'Player not found'}), 404

        changes = PlayerUpdate.model_validate(updates).model_dump(exclude_unset=True)
        for field, value in changes.items():
            setattr(player, field, value)
        db.session.commit()
    except Exception:
        return _server_error('player_update', 'Server error during player update')

    current_app.logger.info(f"[player_update] player={player.id} fields={sorted(changes)}")
    return jsonify(player.to_dict()), 200


@players.route('/<string:player_id>', methods=['DELETE'])
def delete_player(player_id):
    # Malformed ids answer 404 here, unlike the other routes' 400
    player_id = normalize_object_id(player_id)
    if player_id is None:
        return jsonify({'message': 'Player not found'}), 404

    try:
        player = db.session.get(Player, player_id)
        if player is None:
            return jsonify({'message': 'Player not found'}), 404
        db.session.delete(player)
        db.session.commit()
    except Exception:
        return _server_error('player_delete', 'Server error during player deletion')

    current_app.logger.info(f"[player_delete] player={player_id}")
    return jsonify({'message': 'Player Deleted'}), 200


@players.route('/', methods=['GET'])
def list_all_players():
    page, limit, skip = parse_paging(request.args.get('page'), request.args.get('limit'))

    try:
        page_rows = (
            Player.query
            .options(_projection(Player, SUMMARY_FIELDS))
            .order_by(Player.name.asc(), Player.id.asc())
            .offset(skip)
            .limit(limit)
            .all()
        )
        total_players = Player.query.count()
    except Exception:
        return _server_error('player_list', 'Server error while retrieving players')

    return jsonify({
        'message': 'Players retrieved successfully',
        'data': [p.to_dict(SUMMARY_FIELDS) for p in page_rows],
        'pagination': {
            'currentPage': page,
            'totalPages': math.ceil(total_players / limit),
            'totalPlayers': total_players,
        },
    }), 200


@players.route('/search', methods=['GET'])
def search_players():
    search_term = request.args.get('search')
    if not search_term:
        return jsonify({'message': 'Search term is required'}), 400

    pattern = f"%{escape_like(search_term)}%"
    try:
        matches = (
            Player.query
            .options(_projection(Player, SUMMARY_FIELDS))
            .filter(or_(
                Player.name.ilike(pattern, escape='\\'),
                Player.instagram_handle.ilike(pattern, escape='\\'),
            ))
            .limit(SEARCH_LIMIT)
            .all()
        )
    except Exception:
        return _server_error('player_search', 'Server error during player search')

    return jsonify([p.to_dict(SUMMARY_FIELDS) for p in matches]), 200


@players.route('/<string:player_id>', methods=['GET'])
def get_player_by_id(player_id):
    player_id = normalize_object_id(player_id)
    if player_id is None:
        return jsonify({'message': 'Invalid player ID format'}), 400

    try:
        player = db.session.get(Player, player_id)
    except Exception:
        return _server_error('player_get', 'Server error during player retrieval by ID')

    if player is None:
        return jsonify({'message': 'Player not found'}), 404
    return jsonify(player.to_dict()), 200


@players.route('/<string:player_id>/games', methods=['GET'])
def get_player_recent_games(player_id):
    player_id = normalize_object_id(player_id)
    if player_id is None:
        return jsonify({'message': 'Invalid player ID format'}), 400

    try:
        games = (
            Game.query
            .join(game_players, game_players.c.game_id == Game.id)
            .filter(game_players.c.player_id == player_id)
            .options(_projection(Game, RECENT_GAME_FIELDS))
            .order_by(Game.created_at.desc())
            .limit(RECENT_GAMES_LIMIT)
            .all()
        )
    except Exception:
        return _server_error('player_games', 'Server error during player games retrieval')

    return jsonify([g.to_dict(RECENT_GAME_FIELDS) for g in games]), 200


@players.route('/<string:player_id>/shot-chart', methods=['GET'])
def get_player_shot_chart(player_id):
    player_id = normalize_object_id(player_id)
    if player_id is None:
        return jsonify({'message': 'Invalid player ID format'}), 400

    try:
        player = (
            Player.query
            .options(load_only(Player.all_time_shot_data))
            .filter(Player.id == player_id)
            .first()
        )
    except Exception:
        return _server_error('shot_chart', 'Server error during shot chart retrieval')

    if player is None:
        return jsonify({'message': 'Player not found'}), 404
    return jsonify({'shots': player.all_time_shot_data or []}), 200


@players.route('/<string:player_id>/shots', methods=['GET'])
def get_player_game_shots(player_id):
    """Shots recomputed from game event logs.

    With a well-formed ``gameId`` the scan covers that one game whatever its
    status; otherwise it covers every finished game the player took part in.
    """
    player_id = normalize_object_id(player_id)
    if player_id is None:
        return jsonify({'message': 'Invalid player ID format'}), 400

    game_id = normalize_object_id(request.args.get('gameId'))
    try:
        if game_id is not None:
            game = db.session.get(Game, game_id)
            if game is None:
                return jsonify({'message': 'Game not found'}), 404

            shots = extract_player_shots(game, player_id)
            return jsonify({
                'playerId': player_id,
                'gameId': game_id,
                'status': game.status,
                'totalShots': len(shots),
                'shots': shots,
            }), 200

        finished_games = (
            Game.query
            .join(game_players, game_players.c.game_id == Game.id)
            .filter(game_players.c.player_id == player_id, Game.status == 'finished')
            .order_by(Game.created_at.asc(), Game.id.asc())
            .all()
        )
        shots = extract_shots_from_games(finished_games, player_id)
    except Exception:
        return _server_error('game_shots', 'Server error during shot chart retrieval')

    return jsonify({
        'playerId': player_id,
        'totalShots': len(shots),
        'shots': shots,
    }), 200
