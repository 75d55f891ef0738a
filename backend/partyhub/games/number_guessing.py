"""Number guessing: players take turns guessing a hidden number."""
import random
from dataclasses import dataclass, field, replace
from typing import ClassVar, Dict, Optional, Tuple

from partyhub.errors import AuthorityError, ValidationError
from .common import Transition, coerce_int, now_or, require_seated, require_status, seat_players

GAME_ID = 'number-guessing'
NAME = 'Number Guessing'
MIN_PLAYERS = 2
MAX_PLAYERS = 8


@dataclass(frozen=True)
class Config:
    min_range: int = 1
    max_range: int = 100

    def to_dict(self):
        return {'min_range': self.min_range, 'max_range': self.max_range}


def parse_config(data=None):
    data = data or {}
    min_range = coerce_int(data.get('min_range', 1), 'min_range')
    max_range = coerce_int(data.get('max_range', 100), 'max_range')
    if min_range >= max_range:
        raise ValidationError('min_range must be lower than max_range')
    return Config(min_range=min_range, max_range=max_range)


@dataclass(frozen=True)
class Guess:
    player_id: str
    player_name: str
    number: int
    feedback: str
    timestamp: float

    def to_dict(self):
        return {
            'player_id': self.player_id,
            'player_name': self.player_name,
            'number': self.number,
            'feedback': self.feedback,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class State:
    GAME_ID: ClassVar[str] = GAME_ID

    config: Config
    player_ids: Tuple[str, ...]
    player_names: Dict[str, str]
    target_number: int
    current_turn: str
    guesses: Tuple[Guess, ...] = ()
    status: str = 'playing'
    winner: Optional[str] = None
    started_at: float = field(default=0.0)


def initialize(players, config=None, rng=random, now=None):
    config = config or Config()
    player_ids, player_names = seat_players(players)
    return State(
        config=config,
        player_ids=player_ids,
        player_names=player_names,
        target_number=rng.randint(config.min_range, config.max_range),
        current_turn=player_ids[0],
        started_at=now_or(now),
    )


def make_guess(state, player_id, guess, now=None):
    require_status(state, 'playing')
    require_seated(state, player_id)
    if state.current_turn != player_id:
        raise AuthorityError('Not your turn', 'not_your_turn')
    number = coerce_int(guess, 'guess')
    if not state.config.min_range <= number <= state.config.max_range:
        raise ValidationError(
            f'Guess must be between {state.config.min_range} and {state.config.max_range}'
        )

    if number < state.target_number:
        feedback = 'too_low'
    elif number > state.target_number:
        feedback = 'too_high'
    else:
        feedback = 'correct'

    record = Guess(
        player_id=player_id,
        player_name=state.player_names[player_id],
        number=number,
        feedback=feedback,
        timestamp=now_or(now),
    )
    guesses = state.guesses + (record,)
    if feedback == 'correct':
        new_state = replace(state, guesses=guesses, status='finished', winner=player_id)
        return Transition(new_state, {'guess': record.to_dict(), 'feedback': feedback},
                          terminal=True, turn_advances=False)

    idx = state.player_ids.index(player_id)
    next_turn = state.player_ids[(idx + 1) % len(state.player_ids)]
    new_state = replace(state, guesses=guesses, current_turn=next_turn)
    return Transition(new_state, {'guess': record.to_dict(), 'feedback': feedback})


def compute_stats(state):
    per_player = {pid: 0 for pid in state.player_ids}
    for g in state.guesses:
        per_player[g.player_id] += 1
    return {
        'total_guesses': len(state.guesses),
        'guesses_per_player': per_player,
        'winner': state.winner,
        'winner_name': state.player_names.get(state.winner) if state.winner else None,
        'target_number': state.target_number if state.status == 'finished' else None,
    }


def public_view(state):
    """Broadcast form; the target number is only revealed once finished."""
    view = {
        'game_id': GAME_ID,
        'config': state.config.to_dict(),
        'min_range': state.config.min_range,
        'max_range': state.config.max_range,
        'current_turn': state.current_turn,
        'guesses': [g.to_dict() for g in state.guesses],
        'status': state.status,
        'winner': state.winner,
    }
    if state.status == 'finished':
        view['target_number'] = state.target_number
    return view
