class GameHubError(Exception):
    """Base error surfaced to clients as an ``error`` event."""

    code = 'error'

    def __init__(self, message, code=None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_dict(self):
        return {'message': self.message, 'code': self.code}


class NotFoundError(GameHubError):
    code = 'not_found'


class CapacityError(GameHubError):
    code = 'room_full'


class LifecycleError(GameHubError):
    code = 'invalid_state'


class AuthorityError(GameHubError):
    code = 'not_authorized'


class ValidationError(GameHubError):
    code = 'invalid_input'


class InternalError(GameHubError):
    code = 'internal_error'
