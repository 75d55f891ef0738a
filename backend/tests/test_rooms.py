import random
import string

import pytest

from partyhub.errors import AuthorityError, CapacityError, LifecycleError, NotFoundError
from partyhub.models import PermanentRoom
from partyhub.services.registry import RoomRegistry
from partyhub.services.rooms import RoomDirectory


@pytest.fixture()
def directory(flask_app):
    return RoomDirectory(RoomRegistry(flask_app.logger), rng=random.Random(5))


def test_room_codes_are_six_uppercase_alphanumerics(directory):
    room, player = directory.create_room('tic-tac-toe', 'Alice')
    assert len(room.id) == 6
    assert set(room.id) <= set(string.ascii_uppercase + string.digits)
    assert room.players == [player]
    assert room.capacity == 2
    assert room.status == 'waiting'


def test_code_collisions_are_regenerated(flask_app):
    class RepeatingRng:
        def __init__(self):
            self.calls = 0

        def choices(self, population, k):
            self.calls += 1
            return list('AAAAAA') if self.calls <= 2 else list('BBBBBB')

    directory = RoomDirectory(RoomRegistry(flask_app.logger), rng=RepeatingRng())
    first, _ = directory.create_room('hangman', 'Alice')
    second, _ = directory.create_room('hangman', 'Bob')
    assert first.id == 'AAAAAA'
    assert second.id == 'BBBBBB'


def test_join_respects_capacity_and_status(directory):
    room, _ = directory.create_room('rock-paper-scissors', 'Alice')
    room, bob = directory.join_room(room.id, 'Bob')
    assert [p.name for p in room.players] == ['Alice', 'Bob']
    with pytest.raises(CapacityError):
        directory.join_room(room.id, 'Carol')
    with pytest.raises(NotFoundError):
        directory.join_room('NOPE00', 'Carol')

    big, _ = directory.create_room('number-guessing', 'Dan', capacity=4)
    directory.update_status(big.id, 'playing')
    with pytest.raises(LifecycleError):
        directory.join_room(big.id, 'Eve')


def test_leave_is_idempotent_and_empty_rooms_disappear(directory):
    room, alice = directory.create_room('connect-4', 'Alice')
    room, bob = directory.join_room(room.id, 'Bob')
    assert directory.leave_room(room.id, bob.id) is room
    assert directory.leave_room(room.id, bob.id) is None
    assert directory.leave_room(room.id, alice.id) is None
    assert directory.get_room(room.id) is None
    assert directory.leave_room(room.id, alice.id) is None


def test_change_game_resets_ready_flags(directory):
    room, alice = directory.create_room('tic-tac-toe', 'Alice')
    directory.set_player_ready(room.id, alice.id, True)
    directory.update_status(room.id, 'finished')
    room = directory.change_game(room.id, 'hangman')
    assert room.game_id == 'hangman'
    assert room.status == 'waiting'
    assert not alice.is_ready


def test_rooms_for_player(directory):
    room, alice = directory.create_room('tic-tac-toe', 'Alice')
    directory.create_room('hangman', 'Bob')
    assert directory.rooms_for_player(alice.id) == [room]
    assert len(directory.all_rooms()) == 2


def test_permanent_room_is_saved_and_reloaded(directory, make_user):
    owner = make_user('owner1')
    room, player = directory.create_or_load_permanent_room(owner.id, owner.username, 'Game Night', 'connect-4')
    assert room.is_permanent
    assert room.capacity == 8
    assert room.owner_id == owner.id
    assert player.account_id == owner.id

    record = PermanentRoom.query.filter_by(owner_id=owner.id).one()
    assert record.id == room.id
    assert record.name == 'Game Night'

    # The owner leaving keeps the record but marks it inactive
    assert directory.leave_room(room.id, player.id) is None
    assert record.is_active is False

    reloaded, again = directory.load_permanent_room(owner.id, owner.username)
    assert reloaded.id == room.id
    assert reloaded.name == 'Game Night'
    assert record.is_active is True
    assert directory.load_permanent_room(make_user('nobody').id, 'nobody') is None


def test_saving_again_updates_the_same_record(directory, make_user):
    owner = make_user('owner2')
    room, player = directory.create_or_load_permanent_room(owner.id, owner.username, 'First', 'hangman')
    same, same_player = directory.create_or_load_permanent_room(owner.id, owner.username, 'Second', 'tic-tac-toe')
    assert same is room
    assert same_player is player
    assert room.name == 'Second'
    assert room.game_id == 'tic-tac-toe'
    assert PermanentRoom.query.count() == 1


def test_owner_only_rename_and_kick(directory, make_user):
    owner = make_user('owner3')
    guest_account = make_user('guest3')
    room, _ = directory.create_or_load_permanent_room(owner.id, owner.username, 'Den', 'hangman')
    room, guest = directory.join_room(room.id, 'Guest', guest_account.id)

    with pytest.raises(AuthorityError):
        directory.update_room_name(room.id, guest_account.id, 'Mine now')
    assert directory.update_room_name(room.id, owner.id, 'The Den').name == 'The Den'

    with pytest.raises(AuthorityError) as exc:
        directory.kick_player(room.id, guest_account.id, guest.id)
    assert exc.value.code == 'not_owner'
    owner_player = room.players[0]
    with pytest.raises(AuthorityError) as exc:
        directory.kick_player(room.id, owner.id, owner_player.id)
    assert exc.value.code == 'cannot_kick_owner'

    room, kicked = directory.kick_player(room.id, owner.id, guest.id)
    assert kicked is guest
    assert room.find_player(guest.id) is None
    assert directory.get_active_account_ids() == {owner.id}


def test_kick_needs_a_permanent_room(directory):
    room, alice = directory.create_room('tic-tac-toe', 'Alice')
    with pytest.raises(LifecycleError):
        directory.kick_player(room.id, 1, alice.id)


def test_owner_cannot_rejoin_a_full_permanent_room(directory, make_user):
    owner = make_user('owner4')
    room, player = directory.create_or_load_permanent_room(owner.id, owner.username, 'Den', 'hangman', capacity=2)
    directory.join_room(room.id, 'Guest 1')
    directory.leave_room(room.id, player.id)
    directory.join_room(room.id, 'Guest 2')

    with pytest.raises(CapacityError) as exc:
        directory.load_permanent_room(owner.id, owner.username)
    assert exc.value.code == 'room_full'
    with pytest.raises(CapacityError):
        directory.create_or_load_permanent_room(owner.id, owner.username, 'Den', 'hangman')
    assert [p.name for p in room.players] == ['Guest 1', 'Guest 2']


def test_room_owner_lookup(directory, make_user):
    owner = make_user('owner5')
    room, _ = directory.create_or_load_permanent_room(owner.id, owner.username, 'Den', 'hangman')
    temp, _ = directory.create_room('hangman', 'Alice')
    assert directory.get_room_owner_id(room.id) == owner.id
    assert directory.is_room_owner(room.id, owner.id)
    assert not directory.is_room_owner(room.id, owner.id + 1)
    assert directory.get_room_owner_id(temp.id) is None
    assert not directory.is_room_owner(temp.id, None)
    assert directory.get_room_owner_id('NOPE00') is None
