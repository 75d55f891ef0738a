from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from partyhub import db
from partyhub.errors import InternalError
from partyhub.models import PermanentRoom


class RoomRegistry:
    """Durable store of permanent room identity (owner, name, game, active flag).

    Live players and game state are never written here.
    """

    def __init__(self, logger):
        self.logger = logger

    def _commit(self, action):
        try:
            db.session.commit()
        except SQLAlchemyError as exc:
            db.session.rollback()
            self.logger.error(f"[registry-error] action={action} error={exc}")
            raise InternalError('Could not save room', 'registry_error')

    def create_permanent_room(self, owner_id, name, game_id):
        """Create the owner's room, or update it if they already have one."""
        room = self.get_permanent_room(owner_id)
        if room is None:
            room = PermanentRoom(owner_id=owner_id, name=name, game_id=game_id)
            db.session.add(room)
        else:
            room.name = name
            room.game_id = game_id
        room.is_active = True
        room.last_active = datetime.utcnow()
        self._commit('create')
        self.logger.info(f"[registry-save] room={room.id} owner={owner_id} game={game_id}")
        return room

    def get_permanent_room(self, owner_id):
        return PermanentRoom.query.filter_by(owner_id=owner_id).first()

    def get_room(self, room_id):
        return db.session.get(PermanentRoom, room_id)

    def get_public_rooms(self, active_owner_ids):
        ids = list(active_owner_ids)
        if not ids:
            return []
        return (
            PermanentRoom.query
            .filter(PermanentRoom.is_active.is_(True), PermanentRoom.owner_id.in_(ids))
            .order_by(PermanentRoom.last_active.desc())
            .all()
        )

    def update_room_name(self, room_id, owner_id, name):
        room = PermanentRoom.query.filter_by(id=room_id, owner_id=owner_id).first()
        if room is None:
            return False
        room.name = name
        room.last_active = datetime.utcnow()
        self._commit('rename')
        return True

    def _set_active(self, owner_id, active):
        room = self.get_permanent_room(owner_id)
        if room is None:
            return False
        room.is_active = active
        room.last_active = datetime.utcnow()
        self._commit('activate' if active else 'deactivate')
        return True

    def activate(self, owner_id):
        return self._set_active(owner_id, True)

    def deactivate(self, owner_id):
        return self._set_active(owner_id, False)
