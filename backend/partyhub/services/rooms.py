"""In-memory room directory: membership, capacity and permanent-room identity."""
import random
import string
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from partyhub.errors import AuthorityError, CapacityError, LifecycleError, NotFoundError

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits
ROOM_CODE_LENGTH = 6


@dataclass
class Player:
    id: str
    name: str
    is_ready: bool = False
    account_id: Optional[int] = None

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'is_ready': self.is_ready,
            'account_id': self.account_id,
        }


@dataclass
class Room:
    id: str
    game_id: str
    capacity: int
    players: List[Player] = field(default_factory=list)
    status: str = 'waiting'  # waiting, playing, finished
    created_at: float = field(default_factory=time.time)
    is_permanent: bool = False
    owner_id: Optional[int] = None
    name: Optional[str] = None

    def find_player(self, player_id):
        return next((p for p in self.players if p.id == player_id), None)

    def to_dict(self):
        return {
            'id': self.id,
            'game_id': self.game_id,
            'players': [p.to_dict() for p in self.players],
            'max_players': self.capacity,
            'status': self.status,
            'created_at': self.created_at,
            'is_permanent': self.is_permanent,
            'owner_id': self.owner_id,
            'name': self.name,
        }


def new_player(name, account_id=None):
    return Player(id=str(uuid.uuid4()), name=name, account_id=account_id)


class RoomDirectory:
    def __init__(self, registry, rng=random, temp_capacity=2, permanent_capacity=8):
        self.registry = registry
        self.rng = rng
        self.temp_capacity = temp_capacity
        self.permanent_capacity = permanent_capacity
        self._rooms: Dict[str, Room] = {}

    def generate_room_code(self):
        while True:
            code = ''.join(self.rng.choices(ROOM_CODE_ALPHABET, k=ROOM_CODE_LENGTH))
            if code not in self._rooms:
                return code

    def create_room(self, game_id, creator_name, capacity=None, owner_account_id=None):
        player = new_player(creator_name, owner_account_id)
        room = Room(
            id=self.generate_room_code(),
            game_id=game_id,
            capacity=capacity or self.temp_capacity,
            players=[player],
        )
        self._rooms[room.id] = room
        return room, player

    def _attach_permanent(self, record, account_id, username, capacity):
        room = self._rooms.get(record.id)
        if room is not None:
            existing = next((p for p in room.players if p.account_id == account_id), None)
            if existing:
                return room, existing
            if len(room.players) >= room.capacity:
                raise CapacityError('Room is full', 'room_full')
            player = new_player(username, account_id)
            room.players.append(player)
            return room, player

        player = new_player(username, account_id)
        room = Room(
            id=record.id,
            game_id=record.game_id,
            capacity=capacity or self.permanent_capacity,
            players=[player],
            is_permanent=True,
            owner_id=account_id,
            name=record.name,
        )
        self._rooms[room.id] = room
        return room, player

    def create_or_load_permanent_room(self, account_id, username, display_name, game_id, capacity=None):
        record = self.registry.create_permanent_room(account_id, display_name, game_id)
        room, player = self._attach_permanent(record, account_id, username, capacity)
        # The live shell follows the saved name and game while nobody is mid-game.
        room.name = record.name
        if room.status != 'playing':
            room.game_id = record.game_id
        return room, player

    def load_permanent_room(self, account_id, username, capacity=None):
        record = self.registry.get_permanent_room(account_id)
        if record is None:
            return None
        room, player = self._attach_permanent(record, account_id, username, capacity)
        self.registry.activate(account_id)
        return room, player

    def join_room(self, room_id, player_name, account_id=None):
        room = self._rooms.get(room_id)
        if room is None:
            raise NotFoundError('Room not found', 'room_not_found')
        if len(room.players) >= room.capacity:
            raise CapacityError('Room is full', 'room_full')
        if room.status != 'waiting':
            raise LifecycleError('Game already in progress', 'game_in_progress')
        player = new_player(player_name, account_id)
        room.players.append(player)
        return room, player

    def leave_room(self, room_id, player_id):
        """Remove a player; returns the room, or None if it is gone or the player was absent."""
        room = self._rooms.get(room_id)
        if room is None:
            return None
        leaving = room.find_player(player_id)
        if leaving is None:
            return None
        room.players.remove(leaving)

        if room.is_permanent and room.owner_id is not None and leaving.account_id == room.owner_id:
            self.registry.deactivate(room.owner_id)
        if not room.players:
            del self._rooms[room_id]
            return None
        return room

    def get_room(self, room_id) -> Optional[Room]:
        return self._rooms.get(room_id)

    def require_room(self, room_id) -> Room:
        room = self._rooms.get(room_id)
        if room is None:
            raise NotFoundError('Room not found', 'room_not_found')
        return room

    def update_status(self, room_id, status):
        room = self.require_room(room_id)
        room.status = status
        return room

    def change_game(self, room_id, new_game_id):
        room = self.require_room(room_id)
        room.game_id = new_game_id
        room.status = 'waiting'
        for p in room.players:
            p.is_ready = False
        return room

    def set_player_ready(self, room_id, player_id, is_ready):
        room = self.require_room(room_id)
        player = room.find_player(player_id)
        if player is None:
            raise NotFoundError('Player not in room', 'player_not_found')
        player.is_ready = bool(is_ready)
        return room

    def update_room_name(self, room_id, account_id, name):
        room = self.require_room(room_id)
        if not room.is_permanent or room.owner_id != account_id:
            raise AuthorityError('Only the room owner can rename the room', 'not_owner')
        if not self.registry.update_room_name(room_id, account_id, name):
            raise NotFoundError('Room not found', 'room_not_found')
        room.name = name
        return room

    def kick_player(self, room_id, owner_account_id, target_player_id):
        room = self.require_room(room_id)
        if not room.is_permanent:
            raise LifecycleError('Players can only be kicked from permanent rooms', 'not_permanent')
        if room.owner_id != owner_account_id:
            raise AuthorityError('Only the room owner can kick players', 'not_owner')
        target = room.find_player(target_player_id)
        if target is None:
            raise NotFoundError('Player not in room', 'player_not_found')
        if target.account_id == owner_account_id:
            raise AuthorityError('The owner cannot be kicked', 'cannot_kick_owner')
        room.players.remove(target)
        return room, target

    def get_room_owner_id(self, room_id):
        room = self._rooms.get(room_id)
        return room.owner_id if room else None

    def is_room_owner(self, room_id, account_id):
        room = self._rooms.get(room_id)
        return room is not None and account_id is not None and room.owner_id == account_id

    def get_active_account_ids(self):
        return {p.account_id for room in self._rooms.values() for p in room.players if p.account_id}

    def rooms_for_player(self, player_id):
        return [room for room in self._rooms.values() if room.find_player(player_id)]

    def all_rooms(self):
        return list(self._rooms.values())
