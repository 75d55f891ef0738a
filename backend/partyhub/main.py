from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from sqlalchemy.exc import IntegrityError

from partyhub import db
from partyhub.models import User, validate_pin, validate_username

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'name': 'partyhub', 'status': 'ok'})


@main.route('/health')
def health():
    return jsonify({'status': 'ok'})


def _credentials():
    data = request.get_json(silent=True) or {}
    username = (data.get('username') or '').strip()
    pin = data.get('pin')
    if isinstance(pin, int) and not isinstance(pin, bool):
        pin = f'{pin:04d}'
    return username, pin


@main.route('/api/auth/signup', methods=['POST'])
def signup():
    username, pin = _credentials()
    error = validate_username(username) or validate_pin(pin)
    if error:
        return jsonify({'success': False, 'message': error}), 400
    if User.query.filter_by(username=username).first():
        return jsonify({'success': False, 'message': 'Username already exists'}), 400

    user = User(username=username)
    user.set_pin(pin)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({'success': False, 'message': 'Username already exists'}), 400
    login_user(user, remember=True)
    return jsonify({'success': True, 'user': user.to_dict()}), 201


@main.route('/api/auth/login', methods=['POST'])
def login():
    username, pin = _credentials()
    user = User.query.filter_by(username=username).first()
    if user and isinstance(pin, str) and user.check_pin(pin):
        login_user(user, remember=True)
        return jsonify({'success': True, 'user': user.to_dict()})
    return jsonify({'success': False, 'message': 'Invalid username or PIN'}), 401


@main.route('/api/auth/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})


@main.route('/api/auth/me')
def me():
    if not current_user.is_authenticated:
        return jsonify({'success': False, 'user': None}), 401
    room = current_user.permanent_room
    return jsonify({
        'success': True,
        'user': current_user.to_dict(),
        'permanent_room': room.to_dict() if room else None,
    })
