from typing import Any, Dict, Iterable, List, Optional

from courtstats.models import Game


def _shot_record(game_id: str, event: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'gameId': game_id,
        'location': event.get('location'),
        'made': event.get('made'),
        'points': event.get('points'),
        'timestamp': event.get('timestamp'),
    }


def extract_player_shots(game: Game, player_id: str) -> List[Dict[str, Any]]:
    """Collect the player's shot events from one game, in event order.

    Events with no player_id never match.
    """
    shots = []
    for event in game.events or []:
        if not isinstance(event, dict) or event.get('type') != 'shot':
            continue
        owner: Optional[Any] = event.get('player_id')
        if owner is not None and str(owner) == player_id:
            shots.append(_shot_record(game.id, event))
    return shots


def extract_shots_from_games(games: Iterable[Game], player_id: str) -> List[Dict[str, Any]]:
    shots = []
    for game in games:
        shots.extend(extract_player_shots(game, player_id))
    return shots
