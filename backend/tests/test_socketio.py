from partyhub import socketio


def events(client, name):
    return [pkt['args'][0] for pkt in client.get_received('/ws') if pkt['name'] == name]


def test_socket_connect(sio_client):
    assert sio_client.is_connected('/ws')
    received = sio_client.get_received('/ws')
    assert any(pkt['name'] == 'connected' for pkt in received)


def test_create_and_join_over_sockets(flask_app, sio_client):
    sio_client.get_received('/ws')  # flush
    sio_client.emit('create_room', {'player_name': 'Alice', 'game_id': 'tic-tac-toe'}, namespace='/ws')
    created = events(sio_client, 'room_created')[0]
    room_id = created['room']['id']

    guest = socketio.test_client(flask_app, namespace='/ws')
    guest.emit('join_room', {'room_id': room_id, 'player_name': 'Bob'}, namespace='/ws')
    joined = events(guest, 'room_joined')[0]
    assert joined['room']['id'] == room_id

    # The host hears about the new player through the room broadcast
    player_joined = events(sio_client, 'player_joined')
    assert player_joined[0]['player']['name'] == 'Bob'

    sio_client.emit('start_game', {'room_id': room_id}, namespace='/ws')
    assert events(guest, 'game_started')[0]['game_state']['game_id'] == 'tic-tac-toe'

    guest.disconnect(namespace='/ws')
    assert events(sio_client, 'player_left')[0]['game_aborted'] is True


def test_errors_are_sent_back_to_the_caller(sio_client):
    sio_client.get_received('/ws')
    sio_client.emit('join_room', {'room_id': 'NOPE00', 'player_name': 'Bob'}, namespace='/ws')
    error = events(sio_client, 'error')[0]
    assert error == {'message': 'Room not found', 'code': 'room_not_found'}


def test_permanent_room_uses_the_login_session(flask_app):
    http = flask_app.test_client()
    http.post('/api/auth/signup', json={'username': 'sockuser', 'pin': '1234'})
    client = socketio.test_client(flask_app, flask_test_client=http, namespace='/ws')
    client.get_received('/ws')

    client.emit('create_permanent_room', {'name': 'Sock Den', 'game_id': 'hangman'}, namespace='/ws')
    created = events(client, 'room_created')[0]
    assert created['room']['is_permanent'] is True
    assert created['room']['name'] == 'Sock Den'
    client.disconnect(namespace='/ws')


def test_permanent_room_events_need_a_login(flask_app):
    anonymous = socketio.test_client(flask_app, namespace='/ws')
    anonymous.emit('get_my_room', {}, namespace='/ws')
    assert events(anonymous, 'error')[0]['code'] == 'auth_required'
    anonymous.disconnect(namespace='/ws')
