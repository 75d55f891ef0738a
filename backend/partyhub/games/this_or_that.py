"""This or that: a faster, emoji-driven would-you-rather with timed rounds."""
import random
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, Optional, Tuple

from partyhub.errors import LifecycleError, ValidationError
from .banks import CATEGORIES, THIS_OR_THAT_QUESTIONS
from .common import (
    Transition, coerce_int, draw_question, now_or, require_seated, require_status,
    seat_players, split_question_id,
)

GAME_ID = 'this-or-that'
NAME = 'This or That'
MIN_PLAYERS = 2
MAX_PLAYERS = 2


@dataclass(frozen=True)
class Config:
    categories: Tuple[str, ...] = CATEGORIES
    max_rounds: int = 10
    time_per_question: int = 10

    def to_dict(self):
        return {
            'categories': list(self.categories),
            'max_rounds': self.max_rounds,
            'time_per_question': self.time_per_question,
        }


def parse_config(data=None):
    data = data or {}
    categories = tuple(data.get('categories') or CATEGORIES)
    unknown = [c for c in categories if c not in CATEGORIES]
    if unknown:
        raise ValidationError(f'Unknown categories: {", ".join(unknown)}')
    max_rounds = coerce_int(data.get('max_rounds', 10), 'max_rounds')
    time_per_question = coerce_int(data.get('time_per_question', 10), 'time_per_question')
    if max_rounds < 1 or time_per_question < 1:
        raise ValidationError('max_rounds and time_per_question must be positive')
    return Config(categories=categories, max_rounds=max_rounds, time_per_question=time_per_question)


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
    time_elapsed: int

    def to_dict(self):
        return {
            'round': self.round,
            'question': question_dict(self.question_id),
            'choices': [c.to_dict() for c in self.choices],
            'is_match': self.is_match,
            'time_elapsed': self.time_elapsed,
        }


@dataclass(frozen=True)
class State:
    GAME_ID: ClassVar[str] = GAME_ID

    config: Config
    player_ids: Tuple[str, ...]
    player_names: Dict[str, str]
    current_round: int
    question_id: Optional[str]
    question_start_time: float
    choices: Tuple[Choice, ...] = ()
    round_results: Tuple[RoundResult, ...] = ()
    match_count: int = 0
    status: str = 'playing'


def question_dict(question_id):
    if question_id is None:
        return None
    category, index = split_question_id(question_id)
    (emoji_a, text_a), (emoji_b, text_b) = THIS_OR_THAT_QUESTIONS[category][index]
    return {
        'id': question_id,
        'category': category,
        'option_a': {'emoji': emoji_a, 'text': text_a},
        'option_b': {'emoji': emoji_b, 'text': text_b},
    }


def initialize(players, config=None, rng=random, now=None):
    config = config or Config()
    player_ids, player_names = seat_players(players)
    return State(
        config=config,
        player_ids=player_ids,
        player_names=player_names,
        current_round=1,
        question_id=draw_question(THIS_OR_THAT_QUESTIONS, config.categories, rng),
        question_start_time=now_or(now),
    )


def submit_choice(state, player_id, choice, now=None):
    require_status(state, 'playing', message='Not accepting choices right now')
    require_seated(state, player_id)
    if choice not in ('A', 'B'):
        raise ValidationError('Choice must be A or B')
    if any(c.player_id == player_id for c in state.choices):
        raise LifecycleError('Choice already submitted for this round', 'already_submitted')

    timestamp = now_or(now)
    record = Choice(player_id, state.player_names[player_id], choice, timestamp)
    choices = state.choices + (record,)
    if len(choices) < len(state.player_ids):
        return Transition(replace(state, choices=choices), {'choice': record.to_dict(), 'both_chosen': False})

    is_match = len({c.choice for c in choices}) == 1
    elapsed = int(max(0.0, timestamp - state.question_start_time) + 0.5)
    result = RoundResult(state.current_round, state.question_id, choices, is_match, elapsed)
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
        question_id=draw_question(THIS_OR_THAT_QUESTIONS, state.config.categories, rng, used),
        question_start_time=now_or(now),
        choices=(),
        status='playing',
    )
    return Transition(new_state, {
        'finished': False,
        'round': new_state.current_round,
        'question': question_dict(new_state.question_id),
    })


def compute_stats(state):
    total = len(state.round_results)
    average = 0
    compatibility = 0
    if total:
        average = int(sum(r.time_elapsed for r in state.round_results) / total + 0.5)
        compatibility = int(state.match_count * 100 / total + 0.5)
    return {
        'total_rounds': total,
        'matches': state.match_count,
        'differences': total - state.match_count,
        'compatibility_percentage': compatibility,
        'average_time': average,
    }


def public_view(state):
    revealed = state.status != 'playing'
    return {
        'game_id': GAME_ID,
        'config': state.config.to_dict(),
        'current_round': state.current_round,
        'current_question': question_dict(state.question_id),
        'question_start_time': state.question_start_time,
        'submitted': [c.player_id for c in state.choices],
        'choices': [c.to_dict() for c in state.choices] if revealed else [],
        'round_results': [r.to_dict() for r in state.round_results],
        'match_count': state.match_count,
        'status': state.status,
    }
