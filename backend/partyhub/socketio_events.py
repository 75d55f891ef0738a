from flask import request
from flask_login import current_user
from flask_socketio import emit, join_room, leave_room

NAMESPACE = '/ws'


class SocketIOTransport:
    """Room broadcast, private sends and group membership over Flask-SocketIO."""

    def __init__(self, socketio, namespace=NAMESPACE):
        self.socketio = socketio
        self.namespace = namespace

    def broadcast(self, room_id, event, payload):
        # socketio.emit works from background tasks too, not only inside a handler
        self.socketio.emit(event, payload, to=room_id, namespace=self.namespace)

    def send(self, sid, event, payload):
        self.socketio.emit(event, payload, to=sid, namespace=self.namespace)

    def join(self, sid, room_id):
        join_room(room_id, sid=sid, namespace=self.namespace)

    def leave(self, sid, room_id):
        leave_room(room_id, sid=sid, namespace=self.namespace)


def _current_account():
    if current_user and current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def _make_handler(hub, event):
    def handle(data=None):
        hub.dispatch(event, request.sid, data, _current_account())
    handle.__name__ = f'handle_{event}'
    return handle


def register_socketio_handlers(socketio, hub, namespace=NAMESPACE):
    """Register the connection lifecycle plus one handler per hub event on ``namespace``."""

    def handle_connect(auth=None):
        emit('connected', {'message': f'Connected to {namespace}', 'sid': request.sid})

    def handle_disconnect(reason=None):
        hub.disconnect(request.sid)

    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    for event in hub.handlers:
        socketio.on_event(event, _make_handler(hub, event), namespace=namespace)
