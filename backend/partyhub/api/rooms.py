from flask import Blueprint, current_app, jsonify

from partyhub.games import list_games

rooms = Blueprint('rooms', __name__)


def _hub():
    return current_app.extensions['partyhub']


@rooms.route('', methods=['GET'])
def list_rooms():
    """Live rooms held in memory, temporary and permanent alike."""
    hub = _hub()
    with hub.lock:
        live = [room.to_dict() for room in hub.rooms.all_rooms()]
    return jsonify({'rooms': live, 'games': list_games()})


@rooms.route('/public', methods=['GET'])
def public_rooms():
    hub = _hub()
    with hub.lock:
        listing = hub.public_rooms()
    return jsonify({'rooms': listing})
