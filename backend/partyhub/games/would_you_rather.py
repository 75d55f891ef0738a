"""Would you rather: both players pick A or B, then the answers are compared."""
import random
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, Optional, Tuple

from partyhub.errors import LifecycleError, ValidationError
from .banks import CATEGORIES, WOULD_YOU_RATHER_QUESTIONS
from .common import (
    Transition, coerce_int, draw_question, now_or, pick, require_seated,
    require_status, seat_players, split_question_id,
)

GAME_ID = 'would-you-rather'
NAME = 'Would You Rather'
MIN_PLAYERS = 2
MAX_PLAYERS = 2
MODES = ('casual', 'compatibility')


@dataclass(frozen=True)
class Config:
    categories: Tuple[str, ...] = CATEGORIES
    max_rounds: int = 10
    mode: str = 'compatibility'

    def to_dict(self):
        return {'categories': list(self.categories), 'max_rounds': self.max_rounds, 'mode': self.mode}


def parse_config(data=None):
    data = data or {}
    categories = tuple(data.get('categories') or CATEGORIES)
    unknown = [c for c in categories if c not in CATEGORIES]
    if unknown:
        raise ValidationError(f'Unknown categories: {", ".join(unknown)}')
    max_rounds = coerce_int(data.get('max_rounds', 10), 'max_rounds')
    if max_rounds < 1:
        raise ValidationError('max_rounds must be at least 1')
    return Config(categories=categories, max_rounds=max_rounds, mode=pick(data, 'mode', MODES, 'compatibility'))


@dataclass(frozen=True)
class Choice:
    player_id: str
    player_name: str
    choice: str
    timestamp: float

    def to_dict(self):
        return {
            'player_id': self.player_id,
            'player_name': self.player_name,
            'choice': self.choice,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class RoundResult:
    round: int
    question_id: str
    choices: Tuple[Choice, ...]
    is_match: bool

    def to_dict(self):
        return {
            'round': self.round,
            'question': question_dict(self.question_id),
            'choices': [c.to_dict() for c in self.choices],
            'is_match': self.is_match,
        }


@dataclass(frozen=True)
class State:
    GAME_ID: ClassVar[str] = GAME_ID

    config: Config
    player_ids: Tuple[str, ...]
    player_names: Dict[str, str]
    current_round: int
    question_id: Optional[str]
    choices: Tuple[Choice, ...] = ()
    round_results: Tuple[RoundResult, ...] = ()
    match_count: int = 0
    status: str = 'playing'


def question_dict(question_id):
    if question_id is None:
        return None
    category, index = split_question_id(question_id)
    option_a, option_b = WOULD_YOU_RATHER_QUESTIONS[category][index]
    return {'id': question_id, 'category': category, 'option_a': option_a, 'option_b': option_b}


def initialize(players, config=None, rng=random, now=None):
    config = config or Config()
    player_ids, player_names = seat_players(players)
    return State(
        config=config,
        player_ids=player_ids,
        player_names=player_names,
        current_round=1,
        question_id=draw_question(WOULD_YOU_RATHER_QUESTIONS, config.categories, rng),
    )


def submit_choice(state, player_id, choice, now=None):
    """Record a private choice; the second choice reveals the round."""
    require_status(state, 'playing', message='Not accepting choices right now')
    require_seated(state, player_id)
    if choice not in ('A', 'B'):
        raise ValidationError('Choice must be A or B')
    if any(c.player_id == player_id for c in state.choices):
        raise LifecycleError('Choice already submitted for this round', 'already_submitted')

    record = Choice(player_id, state.player_names[player_id], choice, now_or(now))
    choices = state.choices + (record,)
    if len(choices) < len(state.player_ids):
        return Transition(replace(state, choices=choices), {'choice': record.to_dict(), 'both_chosen': False})

    is_match = len({c.choice for c in choices}) == 1
    result = RoundResult(state.current_round, state.question_id, choices, is_match)
    new_state = replace(
        state,
        choices=choices,
        round_results=state.round_results + (result,),
        match_count=state.match_count + (1 if is_match else 0),
        status='revealing',
    )
    return Transition(new_state, {
        'choice': record.to_dict(),
        'both_chosen': True,
        'round_result': result.to_dict(),
    })


def next_question(state, rng=random, now=None):
    require_status(state, 'revealing', message='Round has not been revealed yet')
    if state.current_round >= state.config.max_rounds:
        new_state = replace(state, question_id=None, choices=(), status='finished')
        return Transition(new_state, {'finished': True}, terminal=True)

    used = [r.question_id for r in state.round_results]
    new_state = replace(
        state,
        current_round=state.current_round + 1,
        question_id=draw_question(WOULD_YOU_RATHER_QUESTIONS, state.config.categories, rng, used),
        choices=(),
        status='playing',
    )
    return Transition(new_state, {
        'finished': False,
        'round': new_state.current_round,
        'question': question_dict(new_state.question_id),
    })


def compatibility_percentage(state):
    if not state.round_results:
        return 0
    return int(state.match_count * 100 / len(state.round_results) + 0.5)


def compute_stats(state):
    total = len(state.round_results)
    return {
        'total_rounds': total,
        'matches': state.match_count,
        'differences': total - state.match_count,
        'compatibility_percentage': compatibility_percentage(state),
    }


def public_view(state):
    # Choices stay private until the round is revealed.
    revealed = state.status != 'playing'
    return {
        'game_id': GAME_ID,
        'config': state.config.to_dict(),
        'current_round': state.current_round,
        'current_question': question_dict(state.question_id),
        'submitted': [c.player_id for c in state.choices],
        'choices': [c.to_dict() for c in state.choices] if revealed else [],
        'round_results': [r.to_dict() for r in state.round_results],
        'match_count': state.match_count,
        'status': state.status,
    }
