import threading

import pytest

from tetris_rooms.errors import PlayerNotFound, RoomFull, RoomNotFound
from tetris_rooms.models import Room
from tetris_rooms.services.games.registry import RoomRegistry


def test_add_player_suffixes_duplicates():
    room = Room(0, 10, 20, 4, 0.1)
    assert room.add_player('peter') == 'peter'
    assert room.add_player('peter') == 'peter_'
    assert room.add_player('peter') == 'peter__'
    assert [p.id for p in room.players] == ['peter', 'peter_', 'peter__']


def test_add_player_collides_with_dead_players():
    room = Room(0, 10, 20, 3, 0.1)
    room.add_player('anna')
    room.unregister('anna')
    assert room.add_player('anna') == 'anna_'


def test_last_seat_starts_the_game():
    room = Room(0, 10, 20, 2, 0.1)
    room.add_player('anna')
    assert room.running is False
    room.add_player('bert')
    assert room.running is True
    with pytest.raises(RoomFull):
        room.add_player('carl')
    assert len(room.players) == 2
    assert room.running is True


def test_new_player_defaults():
    room = Room(0, 10, 20, 2, 0.1, penalty_seed=10)
    room.add_player('anna')
    player = room.get_player('anna')
    assert player.alive is True
    assert list(player.penalty_queue) == [0] * 10
    assert player.part_index == 0
    assert player.last_request_time is None


def test_unregister_marks_stored_player_dead():
    room = Room(0, 10, 20, 2, 0.1)
    room.add_player('anna')
    room.unregister('anna')
    assert room.get_player('anna').alive is False
    assert room.to_dict()['screen_names'][0]['alive'] is False
    with pytest.raises(PlayerNotFound):
        room.unregister('nobody')


def test_concurrent_registration_never_exceeds_capacity():
    room = Room(0, 10, 20, 5, 0.1)
    results = []

    def worker():
        try:
            results.append(room.add_player('p'))
        except RoomFull:
            results.append(None)

    threads = [threading.Thread(target=worker) for _ in range(20)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    seated = [r for r in results if r is not None]
    assert len(seated) == 5
    assert len(set(seated)) == 5
    assert len(room.players) == 5
    assert room.running is True


def test_registry_allocates_lowest_free_id():
    registry = RoomRegistry()
    assert [registry.create(10, 20, 2, 0.0).id for _ in range(3)] == [0, 1, 2]
    registry.delete(1)
    assert registry.create(10, 20, 2, 0.0).id == 1
    assert registry.create(10, 20, 2, 0.0).id == 3


def test_registry_get_and_delete():
    registry = RoomRegistry()
    room = registry.create(10, 20, 2, 0.0)
    assert registry.get(room.id) is room
    registry.delete(room.id)
    assert room.id not in registry
    with pytest.raises(RoomNotFound):
        registry.get(room.id)
    with pytest.raises(RoomNotFound):
        registry.delete(room.id)


def test_deleted_room_handle_reports_not_found():
    registry = RoomRegistry()
    room = registry.create(10, 20, 2, 0.0)
    room.add_player('anna')
    registry.delete(room.id)
    with pytest.raises(RoomNotFound):
        room.add_player('bert')
    with pytest.raises(RoomNotFound):
        room.get_player('anna')


def test_registry_list_is_a_copy():
    registry = RoomRegistry()
    room = registry.create(20, 30, 3, 0.1)
    listing = registry.list()
    room.add_player('anna')
    assert listing[room.id]['screen_names'] == []
    assert listing[room.id]['size'] == 3
    assert registry.list()[room.id]['screen_names'][0]['player_id'] == 'anna'


def test_registry_passes_settings_to_rooms():
    registry = RoomRegistry(batch_size=7, penalty_seed=3)
    room = registry.create(10, 20, 1, 0.0)
    room.add_player('anna')
    assert room.batch_size == 7
    assert len(room.get_player('anna').penalty_queue) == 3
