import re

from conftest import shot
from courtstats.models import Game, new_object_id
from courtstats.services.players.params import (
    escape_like,
    is_valid_object_id,
    normalize_object_id,
    parse_paging,
    strip_protected_fields,
)
from courtstats.services.players.shots import extract_player_shots, extract_shots_from_games


def test_new_object_id_is_well_formed():
    ids = {new_object_id() for _ in range(50)}
    assert len(ids) == 50
    assert all(re.fullmatch(r'[0-9a-f]{24}', i) for i in ids)
    assert all(is_valid_object_id(i) for i in ids)


def test_is_valid_object_id():
    assert is_valid_object_id('507f1f77bcf86cd799439011')
    assert is_valid_object_id('507F1F77BCF86CD799439011')
    assert not is_valid_object_id('507f1f77bcf86cd79943901')
    assert not is_valid_object_id('507f1f77bcf86cd79943901z')
    assert not is_valid_object_id('')
    assert not is_valid_object_id(None)
    assert not is_valid_object_id(12345)
    # 12-character strings are not accepted as raw ObjectId bytes
    assert not is_valid_object_id('abcdefghijkl')


def test_normalize_object_id_lowercases():
    assert normalize_object_id('507F1F77BCF86CD799439011') == '507f1f77bcf86cd799439011'
    assert normalize_object_id('507f1f77bcf86cd799439011') == '507f1f77bcf86cd799439011'
    assert normalize_object_id('bogus') is None
    assert normalize_object_id(None) is None


def test_parse_paging():
    assert parse_paging(None, None) == (1, 25, 0)
    assert parse_paging('3', '10') == (3, 10, 20)
    assert parse_paging('x', '') == (1, 25, 0)
    assert parse_paging('0', '-5') == (1, 25, 0)


def test_strip_protected_fields():
    updates = {'name': 'A', 'overall_stats': [], 'all_time_shot_data': [], 'created_by': 1}
    assert strip_protected_fields(updates) == {'name': 'A'}
    # Input mapping is left untouched
    assert 'created_by' in updates


def test_escape_like():
    assert escape_like('50%_off\\') == '50\\%\\_off\\\\'
    assert escape_like('plain') == 'plain'


def test_extract_player_shots_filters_type_and_player():
    pid = 'b' * 24
    game = Game(id='c' * 24, events=[
        shot(pid, timestamp='1'),
        {'type': 'rebound', 'player_id': pid},
        shot('d' * 24, timestamp='2'),
        {'type': 'shot', 'made': True},
        shot(pid, made=False, points=3, timestamp='3'),
    ])
    shots = extract_player_shots(game, pid)
    assert [s['timestamp'] for s in shots] == ['1', '3']
    assert all(s['gameId'] == game.id for s in shots)
    assert set(shots[0]) == {'gameId', 'location', 'made', 'points', 'timestamp'}


def test_extract_player_shots_without_events():
    assert extract_player_shots(Game(id='c' * 24, events=None), 'b' * 24) == []


def test_extract_shots_from_games_keeps_game_order():
    pid = 'b' * 24
    first = Game(id='1' * 24, events=[shot(pid, timestamp='a')])
    second = Game(id='2' * 24, events=[shot(pid, timestamp='b'), shot(pid, timestamp='c')])
    shots = extract_shots_from_games([first, second], pid)
    assert [(s['gameId'], s['timestamp']) for s in shots] == [
        (first.id, 'a'), (second.id, 'b'), (second.id, 'c'),
    ]
