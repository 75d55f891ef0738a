import os


def _origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///partyhub.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = _origins(os.environ.get(
        'CORS_ORIGINS',
        'http://localhost:5173,http://127.0.0.1:5173,http://localhost:5174,http://127.0.0.1:5174',
    ))
    # Room capacity for temporary rooms and for permanent (account) rooms
    TEMP_ROOM_CAPACITY = int(os.environ.get('TEMP_ROOM_CAPACITY', '2'))
    PERMANENT_ROOM_CAPACITY = int(os.environ.get('PERMANENT_ROOM_CAPACITY', '8'))
    # Auto-advance delays after a reveal (seconds)
    WOULD_YOU_RATHER_ADVANCE_SEC = float(os.environ.get('WOULD_YOU_RATHER_ADVANCE_SEC', '4'))
    THIS_OR_THAT_ADVANCE_SEC = float(os.environ.get('THIS_OR_THAT_ADVANCE_SEC', '2'))
    RPS_ADVANCE_SEC = float(os.environ.get('RPS_ADVANCE_SEC', '3'))
    # Timers are started by hand (scheduler.fire) under TESTING unless this is set
    ENABLE_SCHEDULER_IN_TESTS = os.environ.get('ENABLE_SCHEDULER_IN_TESTS', '') == '1'
