def signup(client, username='alice_1', pin='1234'):
    return client.post('/api/auth/signup', json={'username': username, 'pin': pin})


def test_health(client):
    res = client.get('/health')
    assert res.status_code == 200
    assert res.get_json() == {'status': 'ok'}


def test_signup_logs_the_user_in(client):
    res = signup(client)
    assert res.status_code == 201
    assert res.get_json()['user']['username'] == 'alice_1'
    me = client.get('/api/auth/me').get_json()
    assert me['user']['username'] == 'alice_1'
    assert me['permanent_room'] is None


def test_signup_validation(client):
    assert signup(client, username='al').status_code == 400
    assert signup(client, username='has space').status_code == 400
    assert signup(client, pin='12345').status_code == 400
    assert signup(client, pin='abcd').status_code == 400
    assert signup(client).status_code == 201
    # duplicate username
    res = signup(client)
    assert res.status_code == 400
    assert res.get_json()['message'] == 'Username already exists'


def test_pin_is_not_stored_in_plain_text(flask_app, client):
    from partyhub.models import User
    signup(client, username='bob_2', pin='4321')
    user = User.query.filter_by(username='bob_2').one()
    assert user.pin_hash != '4321'
    assert user.check_pin('4321')
    assert not user.check_pin('1234')


def test_login_and_logout(flask_app):
    signup(flask_app.test_client(), username='carol')
    client = flask_app.test_client()
    res = client.post('/api/auth/login', json={'username': 'carol', 'pin': '0000'})
    assert res.status_code == 401
    res = client.post('/api/auth/login', json={'username': 'carol', 'pin': '1234'})
    assert res.status_code == 200
    assert res.get_json()['success'] is True

    assert client.post('/api/auth/logout').status_code == 200
    assert client.get('/api/auth/me').status_code == 401


def test_rooms_listing(flask_app, client):
    body = client.get('/api/rooms').get_json()
    assert body['rooms'] == []
    assert {g['id'] for g in body['games']} == {
        'number-guessing', 'would-you-rather', 'this-or-that', 'tic-tac-toe',
        'connect-4', 'rock-paper-scissors', 'hangman',
    }

    hub = flask_app.extensions['partyhub']
    room, _ = hub.rooms.create_room('hangman', 'Alice')
    rooms = client.get('/api/rooms').get_json()['rooms']
    assert [r['id'] for r in rooms] == [room.id]


def test_public_rooms_only_list_connected_owners(flask_app, client, make_user):
    hub = flask_app.extensions['partyhub']
    owner = make_user('dave')
    room, player = hub.rooms.create_or_load_permanent_room(owner.id, owner.username, 'Dave Den', 'tic-tac-toe')
    listing = client.get('/api/rooms/public').get_json()['rooms']
    assert [(r['name'], r['owner_name'], r['player_count']) for r in listing] == [('Dave Den', 'dave', 1)]

    hub.rooms.leave_room(room.id, player.id)
    assert client.get('/api/rooms/public').get_json()['rooms'] == []
