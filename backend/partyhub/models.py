import re
import uuid
from datetime import datetime

from flask_login import UserMixin

from partyhub import bcrypt, db

USERNAME_RE = re.compile(r'^[A-Za-z0-9_]{3,20}$')
PIN_RE = re.compile(r'^\d{4}$')


def validate_username(username):
    if not username or not USERNAME_RE.match(username):
        return 'Username must be 3-20 characters: letters, numbers or underscores'
    return None


def validate_pin(pin):
    if not isinstance(pin, str) or not PIN_RE.match(pin):
        return 'PIN must be exactly 4 digits'
    return None


class User(UserMixin, db.Model):
    __tablename__ = 'user'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(20), unique=True, nullable=False, index=True)
    pin_hash = db.Column(db.String(128), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    permanent_room = db.relationship('PermanentRoom', back_populates='owner', uselist=False)

    def set_pin(self, pin):
        self.pin_hash = bcrypt.generate_password_hash(pin).decode('utf-8')

    def check_pin(self, pin):
        return bcrypt.check_password_hash(self.pin_hash, pin)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


def _room_id():
    return str(uuid.uuid4())


class PermanentRoom(db.Model):
    """Durable identity of a user's own room. Players and game state live in memory."""
    __tablename__ = 'permanent_room'
    id = db.Column(db.String(36), primary_key=True, default=_room_id)
    owner_id = db.Column(db.Integer, db.ForeignKey('user.id'), unique=True, nullable=False, index=True)
    name = db.Column(db.String(64), nullable=False)
    game_id = db.Column(db.String(32), nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    last_active = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    owner = db.relationship('User', back_populates='permanent_room')

    def to_dict(self):
        return {
            'id': self.id,
            'owner_id': self.owner_id,
            'owner_name': self.owner.username if self.owner else None,
            'name': self.name,
            'game_id': self.game_id,
            'is_active': self.is_active,
            'last_active': self.last_active.isoformat() if self.last_active else None,
        }
