"""Rock paper scissors (optionally lizard and spock), best-of-N rounds.

Both choices stay hidden until the second one arrives. Shields turn a lost
round into a draw and double points score a won round twice. Both effects
only apply to the round in which they were activated.
"""
import random
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, FrozenSet, Optional, Tuple

from partyhub.errors import LifecycleError, ValidationError
from .common import (
    Transition, coerce_int, consume_power_up, games_needed_to_win, grant_power_ups,
    now_or, other_player, pick, require_seated, require_status, seat_players,
)

GAME_ID = 'rock-paper-scissors'
NAME = 'Rock Paper Scissors'
MIN_PLAYERS = 2
MAX_PLAYERS = 2
VARIANTS = ('classic', 'extended')
BEST_OF = (1, 3, 5, 7)
POWER_UP_TYPES = ('reveal', 'shield', 'double_points')
CLASSIC_CHOICES = ('rock', 'paper', 'scissors')
EXTENDED_CHOICES = CLASSIC_CHOICES + ('lizard', 'spock')

BEATS = {
    'rock': {'scissors', 'lizard'},
    'paper': {'rock', 'spock'},
    'scissors': {'paper', 'lizard'},
    'lizard': {'paper', 'spock'},
    'spock': {'rock', 'scissors'},
}


@dataclass(frozen=True)
class Config:
    variant: str = 'classic'
    best_of: int = 3
    time_limit: int = 0
    power_ups_enabled: bool = False

    @property
    def choices(self):
        return CLASSIC_CHOICES if self.variant == 'classic' else EXTENDED_CHOICES

    def to_dict(self):
        return {
            'variant': self.variant,
            'best_of': self.best_of,
            'time_limit': self.time_limit,
            'power_ups_enabled': self.power_ups_enabled,
        }


def parse_config(data=None):
    data = data or {}
    time_limit = coerce_int(data.get('time_limit', 0), 'time_limit')
    if time_limit < 0:
        raise ValidationError('time_limit cannot be negative')
    return Config(
        variant=pick(data, 'variant', VARIANTS, 'classic'),
        best_of=pick(data, 'best_of', BEST_OF, 3),
        time_limit=time_limit,
        power_ups_enabled=bool(data.get('power_ups_enabled', False)),
    )


@dataclass(frozen=True)
class Round:
    round_number: int
    choices: Dict[str, Optional[str]]
    winner: Optional[str]
    power_ups_used: Dict[str, str]
    double_points: bool
    duration: float

    def to_dict(self):
        return {
            'round_number': self.round_number,
            'choices': dict(self.choices),
            'winner': self.winner,
            'power_ups_used': dict(self.power_ups_used),
            'double_points': self.double_points,
            'duration': self.duration,
        }


@dataclass(frozen=True)
class State:
    GAME_ID: ClassVar[str] = GAME_ID

    config: Config
    player_ids: Tuple[str, ...]
    player_names: Dict[str, str]
    round_start_time: float
    current_round: int = 1
    choices: Dict[str, str] = None
    round_results: Tuple[Round, ...] = ()
    match_score: Dict[str, int] = None
    power_ups: tuple = ()
    shields: FrozenSet[str] = frozenset()
    status: str = 'waiting'
    # player id of the match winner, or 'draw'
    winner: Optional[str] = None


def initialize(players, config=None, rng=random, now=None):
    config = config or Config()
    player_ids, player_names = seat_players(players)
    return State(
        config=config,
        player_ids=player_ids,
        player_names=player_names,
        round_start_time=now_or(now),
        choices={},
        match_score={player_ids[0]: 0, player_ids[1]: 0, 'draws': 0},
        power_ups=grant_power_ups(player_ids, POWER_UP_TYPES) if config.power_ups_enabled else (),
    )


def determine_winner(choice_a, choice_b):
    """Return 'a', 'b' or 'draw'."""
    if choice_a == choice_b:
        return 'draw'
    return 'a' if choice_b in BEATS[choice_a] else 'b'


def _round_power_ups(state):
    return {
        p.player_id: p.type
        for p in state.power_ups
        if p.used and p.used_in_round == state.current_round and p.type != 'reveal'
    }


def _evaluate(state, now):
    first, second = state.player_ids
    choice_a, choice_b = state.choices.get(first), state.choices.get(second)
    if choice_a and choice_b:
        outcome = determine_winner(choice_a, choice_b)
        winner = {'a': first, 'b': second}.get(outcome)
    elif choice_a or choice_b:
        # Only reachable on timeout; whoever chose takes the round.
        winner = first if choice_a else second
    else:
        winner = None

    if winner and other_player(state.player_ids, winner) in state.shields:
        winner = None

    used = _round_power_ups(state)
    double_points = bool(winner) and used.get(winner) == 'double_points'
    score = dict(state.match_score)
    if winner:
        score[winner] += 2 if double_points else 1
    else:
        score['draws'] += 1

    result = Round(
        round_number=state.current_round,
        choices={first: choice_a, second: choice_b},
        winner=winner or 'draw',
        power_ups_used=used,
        double_points=double_points,
        duration=now - state.round_start_time,
    )
    needed = games_needed_to_win(state.config.best_of)
    match_over = score[first] >= needed or score[second] >= needed
    match_winner = None
    if match_over:
        if score[first] == score[second]:
            match_winner = 'draw'
        else:
            match_winner = first if score[first] > score[second] else second

    new_state = replace(
        state,
        round_results=state.round_results + (result,),
        match_score=score,
        shields=frozenset(),
        status='match_over' if match_over else 'round_over',
        winner=match_winner,
    )
    return new_state, result, match_over


def submit_choice(state, player_id, choice, power_up_type=None, now=None):
    require_status(state, 'waiting', 'playing', message='Cannot submit choice in current game state')
    require_seated(state, player_id)
    if choice not in state.config.choices:
        if choice in EXTENDED_CHOICES:
            raise ValidationError('Lizard and Spock are not available in classic mode')
        raise ValidationError(f'Invalid choice: {choice}')
    if player_id in state.choices:
        raise LifecycleError('Choice already submitted for this round', 'already_submitted')

    now = now_or(now)
    revealed = None
    if power_up_type:
        state, revealed = _activate(state, player_id, power_up_type)

    choices = dict(state.choices)
    choices[player_id] = choice
    state = replace(state, choices=choices, status='playing')
    result = {'choice': choice, 'power_up': power_up_type, 'both_submitted': False}
    if power_up_type == 'reveal':
        result['opponent_choice'] = revealed
    if len(choices) < len(state.player_ids):
        return Transition(state, result)

    state, round_result, match_over = _evaluate(state, now)
    result.update(both_submitted=True, round_result=round_result.to_dict(), match_over=match_over)
    return Transition(state, result, terminal=match_over)


def _activate(state, player_id, power_up_type):
    if not state.config.power_ups_enabled:
        raise LifecycleError('Power-ups are not enabled', 'power_ups_disabled')
    if power_up_type not in POWER_UP_TYPES:
        raise ValidationError('Unknown power-up type')
    power_ups = consume_power_up(state.power_ups, player_id, power_up_type, state.current_round)
    state = replace(state, power_ups=power_ups)
    revealed = None
    if power_up_type == 'shield':
        state = replace(state, shields=state.shields | {player_id})
    elif power_up_type == 'reveal':
        revealed = state.choices.get(other_player(state.player_ids, player_id))
    return state, revealed


def use_power_up(state, player_id, power_up_type, now=None):
    """Activate a power-up before choosing; reveal answers privately."""
    require_status(state, 'waiting', 'playing', message='Cannot use a power-up right now')
    require_seated(state, player_id)
    if player_id in state.choices:
        raise LifecycleError('Choice already submitted for this round', 'already_submitted')
    state, revealed = _activate(state, player_id, power_up_type)
    result = {'power_up': power_up_type}
    if power_up_type == 'reveal':
        result['opponent_choice'] = revealed
    return Transition(state, result, turn_advances=False)


def next_round(state, now=None):
    if state.status != 'round_over':
        raise LifecycleError('Can only start next round after current round is over', 'round_not_over')
    state = replace(
        state,
        current_round=state.current_round + 1,
        choices={},
        round_start_time=now_or(now),
        status='waiting',
    )
    return Transition(state, {'round': state.current_round})


def has_time_limit_exceeded(state, now=None):
    if state.config.time_limit == 0 or state.status not in ('waiting', 'playing'):
        return False
    return now_or(now) - state.round_start_time > state.config.time_limit


def seconds_left(state, now=None):
    return state.config.time_limit - (now_or(now) - state.round_start_time)


def handle_time_expired(state, now=None):
    """Resolve the round with whatever has been chosen; missing choices lose."""
    require_status(state, 'waiting', 'playing')
    missing = [pid for pid in state.player_ids if pid not in state.choices]
    state, round_result, match_over = _evaluate(state, now_or(now))
    return Transition(state, {
        'expired_players': missing,
        'round_result': round_result.to_dict(),
        'match_over': match_over,
    }, terminal=match_over)


def compute_stats(state):
    total = len(state.round_results)
    return {
        'total_rounds': total,
        'average_round_duration': sum(r.duration for r in state.round_results) / total if total else 0,
        'match_score': dict(state.match_score),
        'match_winner': state.winner,
        'rounds_played': total,
    }


def public_view(state):
    return {
        'game_id': GAME_ID,
        'config': state.config.to_dict(),
        'current_round': state.current_round,
        'submitted': [pid for pid in state.player_ids if pid in state.choices],
        'round_results': [r.to_dict() for r in state.round_results],
        'match_score': dict(state.match_score),
        'power_ups': [p.to_dict() for p in state.power_ups],
        'round_start_time': state.round_start_time,
        'status': state.status,
        'winner': state.winner,
    }
