"""Hangman in co-op (word from the bank) or PvP (one player sets the word)."""
import random
import re
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, Optional, Tuple

from partyhub.errors import AuthorityError, LifecycleError, ValidationError
from .banks import HANGMAN_WORDS
from .common import (
    Transition, coerce_int, consume_power_up, grant_power_ups, now_or, pick,
    require_seated, require_status, seat_players,
)

GAME_ID = 'hangman'
NAME = 'Hangman'
MIN_PLAYERS = 2
MAX_PLAYERS = 2
MODES = ('pvp', 'coop')
CATEGORIES = tuple(HANGMAN_WORDS)
DIFFICULTIES = ('easy', 'medium', 'hard')
POWER_UP_TYPES = ('reveal_letter', 'remove_wrong', 'extra_guess')
WORD_RE = re.compile(r'^[A-Z ]+$')
LETTER_RE = re.compile(r'^[A-Z]$')
# letters allowed per difficulty, upper bound inclusive
WORD_LENGTHS = {'easy': (4, 6), 'medium': (7, 9), 'hard': (10, None)}


@dataclass(frozen=True)
class Config:
    mode: str = 'coop'
    category: str = 'movies'
    difficulty: str = 'medium'
    time_limit: int = 0
    power_ups_enabled: bool = False
    max_wrong_guesses: int = 6

    def to_dict(self):
        return {
            'mode': self.mode,
            'category': self.category,
            'difficulty': self.difficulty,
            'time_limit': self.time_limit,
            'power_ups_enabled': self.power_ups_enabled,
            'max_wrong_guesses': self.max_wrong_guesses,
        }


def parse_config(data=None):
    data = data or {}
    time_limit = coerce_int(data.get('time_limit', 0), 'time_limit')
    max_wrong = coerce_int(data.get('max_wrong_guesses', 6), 'max_wrong_guesses')
    if time_limit < 0:
        raise ValidationError('time_limit cannot be negative')
    if max_wrong < 1:
        raise ValidationError('max_wrong_guesses must be at least 1')
    return Config(
        mode=pick(data, 'mode', MODES, 'coop'),
        category=pick(data, 'category', CATEGORIES, 'movies'),
        difficulty=pick(data, 'difficulty', DIFFICULTIES, 'medium'),
        time_limit=time_limit,
        power_ups_enabled=bool(data.get('power_ups_enabled', False)),
        max_wrong_guesses=max_wrong,
    )


@dataclass(frozen=True)
class Guess:
    player_id: str
    player_name: str
    letter: Optional[str]
    correct: bool
    timestamp: float

    def to_dict(self):
        return {
            'player_id': self.player_id,
            'player_name': self.player_name,
            'letter': self.letter,
            'correct': self.correct,
            'timestamp': self.timestamp,
        }


@dataclass(frozen=True)
class State:
    GAME_ID: ClassVar[str] = GAME_ID

    config: Config
    player_ids: Tuple[str, ...]
    player_names: Dict[str, str]
    word: str
    word_setter: Optional[str]
    guess_start_time: float
    guessed_letters: Tuple[str, ...] = ()
    wrong_guesses: Tuple[Optional[str], ...] = ()
    wrong_guess_count: int = 0
    bonus_guesses: int = 0
    power_ups: tuple = ()
    guess_history: Tuple[Guess, ...] = ()
    status: str = 'playing'
    # player id, 'team' for a co-op win, None otherwise
    winner: Optional[str] = None

    @property
    def allowed_wrong_guesses(self):
        return self.config.max_wrong_guesses + self.bonus_guesses


def initialize(players, config=None, rng=random, now=None):
    config = config or Config()
    player_ids, player_names = seat_players(players)
    if config.mode == 'pvp':
        word, status = '', 'setup'
    else:
        word, status = rng.choice(HANGMAN_WORDS[config.category][config.difficulty]), 'playing'
    return State(
        config=config,
        player_ids=player_ids,
        player_names=player_names,
        word=word,
        word_setter=None,
        guess_start_time=now_or(now),
        power_ups=grant_power_ups(player_ids, POWER_UP_TYPES) if config.power_ups_enabled else (),
        status=status,
    )


def validate_word(word, difficulty):
    normalized = (word or '').upper().strip()
    if not WORD_RE.match(normalized):
        raise ValidationError('Word must contain only letters and spaces')
    length = len(normalized.replace(' ', ''))
    low, high = WORD_LENGTHS[difficulty]
    if length < low or (high is not None and length > high):
        span = f'{low}-{high}' if high else f'{low}+'
        raise ValidationError(f'{difficulty.capitalize()} mode: word must be {span} letters')
    return normalized


def set_word(state, player_id, word, now=None):
    require_status(state, 'setup', message='Can only set word during setup phase')
    if state.config.mode != 'pvp':
        raise LifecycleError('Word setting is only for PvP mode', 'wrong_mode')
    require_seated(state, player_id)
    normalized = validate_word(word, state.config.difficulty)
    new_state = replace(state, word=normalized, word_setter=player_id, status='playing',
                        guess_start_time=now_or(now))
    return Transition(new_state, {'word_setter': player_id, 'word_length': len(normalized)})


def word_letters(word):
    return {ch for ch in word if ch.isalpha()}


def masked_word(state):
    guessed = set(state.guessed_letters)
    return ''.join(ch if (not ch.isalpha() or ch in guessed) else '_' for ch in state.word)


def _apply_power_up(state, player_id, power_up_type, pending_letter, rng):
    if not state.config.power_ups_enabled:
        raise LifecycleError('Power-ups are not enabled', 'power_ups_disabled')
    if power_up_type not in POWER_UP_TYPES:
        raise ValidationError('Unknown power-up type')
    state = replace(state, power_ups=consume_power_up(state.power_ups, player_id, power_up_type))
    if power_up_type == 'reveal_letter':
        hidden = sorted(word_letters(state.word) - set(state.guessed_letters) - {pending_letter})
        if hidden:
            state = replace(state, guessed_letters=state.guessed_letters + (rng.choice(hidden),))
    elif power_up_type == 'remove_wrong':
        if state.wrong_guesses:
            state = replace(
                state,
                wrong_guesses=state.wrong_guesses[:-1],
                wrong_guess_count=max(0, state.wrong_guess_count - 1),
            )
    else:
        state = replace(state, bonus_guesses=state.bonus_guesses + 1)
    return state


def _settle(state, guesser):
    """Return ``state`` marked won or lost if the word is complete or the gallows full."""
    if word_letters(state.word) <= set(state.guessed_letters):
        if state.config.mode == 'coop':
            winner = 'team'
        else:
            winner = guesser
        return replace(state, status='won', winner=winner)
    if state.wrong_guess_count >= state.allowed_wrong_guesses:
        winner = state.word_setter if state.config.mode == 'pvp' else None
        return replace(state, status='lost', winner=winner)
    return state


def guess_letter(state, player_id, letter, power_up_type=None, rng=random, now=None):
    require_status(state, 'playing', message='Cannot guess letter when game is not playing')
    require_seated(state, player_id)
    if state.config.mode == 'pvp' and player_id == state.word_setter:
        raise AuthorityError('The word setter cannot guess', 'word_setter_cannot_guess')
    normalized = (letter or '').upper().strip() if isinstance(letter, str) else ''
    if not LETTER_RE.match(normalized):
        raise ValidationError('Must guess a single letter')
    if normalized in state.guessed_letters:
        raise ValidationError('Letter already guessed')

    if power_up_type:
        state = _apply_power_up(state, player_id, power_up_type, normalized, rng)

    now = now_or(now)
    correct = normalized in state.word
    record = Guess(player_id, state.player_names[player_id], normalized, correct, now)
    state = replace(
        state,
        guessed_letters=state.guessed_letters + (normalized,),
        wrong_guesses=state.wrong_guesses if correct else state.wrong_guesses + (normalized,),
        wrong_guess_count=state.wrong_guess_count + (0 if correct else 1),
        guess_history=state.guess_history + (record,),
        guess_start_time=now,
    )
    state = _settle(state, player_id)
    terminal = state.status in ('won', 'lost')
    return Transition(state, {
        'guess': record.to_dict(),
        'correct': correct,
        'power_up': power_up_type,
        'masked_word': masked_word(state),
        'game_over': terminal,
    }, terminal=terminal)


def has_time_limit_exceeded(state, now=None):
    if state.config.time_limit == 0 or state.status != 'playing':
        return False
    return now_or(now) - state.guess_start_time > state.config.time_limit


def seconds_left(state, now=None):
    return state.config.time_limit - (now_or(now) - state.guess_start_time)


def handle_time_expired(state, now=None):
    """A guess that runs out of time counts as a wrong guess."""
    require_status(state, 'playing')
    now = now_or(now)
    guessers = [pid for pid in state.player_ids if pid != state.word_setter]
    state = replace(
        state,
        wrong_guesses=state.wrong_guesses + (None,),
        wrong_guess_count=state.wrong_guess_count + 1,
        guess_start_time=now,
    )
    state = _settle(state, guessers[0])
    terminal = state.status in ('won', 'lost')
    return Transition(state, {'masked_word': masked_word(state), 'game_over': terminal}, terminal=terminal)


def compute_stats(state):
    total = len(state.guess_history)
    correct = sum(1 for g in state.guess_history if g.correct)
    return {
        'total_guesses': total,
        'correct_guesses': correct,
        'wrong_guesses': state.wrong_guess_count,
        'accuracy': int(correct * 100 / total + 0.5) if total else 0,
        'masked_word': masked_word(state),
        'is_complete': bool(state.word) and word_letters(state.word) <= set(state.guessed_letters),
        'word': state.word if state.status in ('won', 'lost') else None,
        'winner': state.winner,
    }


def public_view(state):
    """Broadcast form; the word itself only appears once the game is over."""
    over = state.status in ('won', 'lost')
    return {
        'game_id': GAME_ID,
        'config': state.config.to_dict(),
        'masked_word': masked_word(state),
        'word': state.word if over else None,
        'word_setter': state.word_setter,
        'category': state.config.category,
        'guessed_letters': list(state.guessed_letters),
        'wrong_guesses': [g for g in state.wrong_guesses if g],
        'wrong_guess_count': state.wrong_guess_count,
        'allowed_wrong_guesses': state.allowed_wrong_guesses,
        'power_ups': [p.to_dict() for p in state.power_ups],
        'guess_start_time': state.guess_start_time,
        'guess_history': [g.to_dict() for g in state.guess_history],
        'status': state.status,
        'winner': state.winner,
    }
