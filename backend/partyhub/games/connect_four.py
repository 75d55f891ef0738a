"""Connect 4 played as a best-of-N match, with optional power-ups.

Player 0 plays Yellow and opens the first game. Discs fall to the lowest
free row of the chosen column; four in a row in any direction wins.
"""
import random
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, Optional, Tuple

from partyhub.errors import AuthorityError, LifecycleError, ValidationError
from .common import (
    Transition, coerce_int, consume_power_up, games_needed_to_win, grant_power_ups,
    now_or, pick, require_seated, require_status, seat_players,
)

GAME_ID = 'connect-4'
NAME = 'Connect 4'
MIN_PLAYERS = 2
MAX_PLAYERS = 2
BOARD_SIZES = ('6x7', '7x8', '8x9')
BEST_OF = (1, 3, 5, 7)
POWER_UP_TYPES = ('remove_disc', 'block_column', 'swap_colors', 'extra_turn')
YELLOW = 'Yellow'
RED = 'Red'
DIRECTIONS = ((0, 1), (1, 0), (1, 1), (1, -1))


@dataclass(frozen=True)
class Config:
    board_size: str = '6x7'
    best_of: int = 3
    time_limit: int = 0
    power_ups_enabled: bool = False

    @property
    def dimensions(self):
        rows, cols = self.board_size.split('x')
        return int(rows), int(cols)

    def to_dict(self):
        return {
            'board_size': self.board_size,
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
        board_size=pick(data, 'board_size', BOARD_SIZES, '6x7'),
        best_of=pick(data, 'best_of', BEST_OF, 3),
        time_limit=time_limit,
        power_ups_enabled=bool(data.get('power_ups_enabled', False)),
    )


@dataclass(frozen=True)
class Move:
    col: int
    row: int
    player: str
    timestamp: float

    def to_dict(self):
        return {'col': self.col, 'row': self.row, 'player': self.player, 'timestamp': self.timestamp}


@dataclass(frozen=True)
class GameResult:
    game_number: int
    winner: str
    moves: Tuple[Move, ...]
    duration: float

    def to_dict(self):
        return {
            'game_number': self.game_number,
            'winner': self.winner,
            'moves': [m.to_dict() for m in self.moves],
            'duration': self.duration,
        }


@dataclass(frozen=True)
class State:
    GAME_ID: ClassVar[str] = GAME_ID

    config: Config
    player_ids: Tuple[str, ...]
    player_names: Dict[str, str]
    board: Tuple[Tuple[Optional[str], ...], ...]
    current_player: str
    game_number: int
    match_score: Dict[str, int]
    move_start_time: float
    game_start_time: float
    moves: Tuple[Move, ...] = ()
    power_ups: tuple = ()
    # (column, color that may not drop there)
    blocked_columns: Tuple[Tuple[int, str], ...] = ()
    extra_turn_for: Optional[str] = None
    game_results: Tuple[GameResult, ...] = ()
    status: str = 'playing'
    winner: Optional[str] = None


def empty_board(config):
    rows, cols = config.dimensions
    return tuple(tuple(None for _ in range(cols)) for _ in range(rows))


def color_for(state, player_id):
    require_seated(state, player_id)
    return YELLOW if state.player_ids[0] == player_id else RED


def player_for(state, color):
    return state.player_ids[0] if color == YELLOW else state.player_ids[1]


def opponent(color):
    return RED if color == YELLOW else YELLOW


def initialize(players, config=None, rng=random, now=None):
    config = config or Config()
    player_ids, player_names = seat_players(players)
    started = now_or(now)
    return State(
        config=config,
        player_ids=player_ids,
        player_names=player_names,
        board=empty_board(config),
        current_player=YELLOW,
        game_number=1,
        match_score={YELLOW: 0, RED: 0, 'draws': 0},
        move_start_time=started,
        game_start_time=started,
        power_ups=grant_power_ups(player_ids, POWER_UP_TYPES) if config.power_ups_enabled else (),
    )


def is_column_full(board, col):
    return board[0][col] is not None


def is_board_full(board):
    return all(cell is not None for cell in board[0])


def drop_disc(board, col, color):
    """Return ``(board, row)`` after dropping a disc into ``col``."""
    for row in range(len(board) - 1, -1, -1):
        if board[row][col] is None:
            rows = [list(r) for r in board]
            rows[row][col] = color
            return tuple(tuple(r) for r in rows), row
    raise ValidationError('Column is full')


def connects_four(board, row, col, color):
    """True when the disc at (row, col) is part of four in a row."""
    rows, cols = len(board), len(board[0])
    for dr, dc in DIRECTIONS:
        count = 1
        for sign in (1, -1):
            r, c = row + dr * sign, col + dc * sign
            while 0 <= r < rows and 0 <= c < cols and board[r][c] == color:
                count += 1
                r, c = r + dr * sign, c + dc * sign
        if count >= 4:
            return True
    return False


def has_four(board, color):
    return any(
        connects_four(board, r, c, color)
        for r, row in enumerate(board)
        for c, cell in enumerate(row)
        if cell == color
    )


def _check_column(state, col):
    col = coerce_int(col, 'col')
    if not 0 <= col < state.config.dimensions[1]:
        raise ValidationError('Invalid column')
    return col


def _require_turn(state, player_id):
    color = color_for(state, player_id)
    if state.current_player != color:
        raise AuthorityError('Not your turn', 'not_your_turn')
    return color


def _finish_game(state, winner, now):
    score = dict(state.match_score)
    score['draws' if winner == 'draw' else winner] += 1
    result = GameResult(state.game_number, winner, state.moves, now - state.game_start_time)
    return replace(
        state,
        match_score=score,
        game_results=state.game_results + (result,),
        blocked_columns=(),
        extra_turn_for=None,
        status='game_over',
        winner=winner,
    )


def make_move(state, player_id, col, now=None):
    require_status(state, 'playing')
    color = _require_turn(state, player_id)
    col = _check_column(state, col)
    if is_column_full(state.board, col):
        raise ValidationError('Column is full')
    blocked_for_me = {c for c, target in state.blocked_columns if target == color}
    if col in blocked_for_me:
        open_columns = [c for c in range(len(state.board[0])) if not is_column_full(state.board, c)]
        if any(c not in blocked_for_me for c in open_columns):
            raise ValidationError('This column is blocked')

    now = now_or(now)
    board, row = drop_disc(state.board, col, color)
    move = Move(col, row, color, now)
    state = replace(
        state,
        board=board,
        moves=state.moves + (move,),
        blocked_columns=tuple(b for b in state.blocked_columns if b[1] != color),
    )

    if connects_four(board, row, col, color):
        state = _finish_game(state, color, now)
    elif is_board_full(board):
        state = _finish_game(state, 'draw', now)
    if state.status == 'game_over':
        return Transition(state, {'move': move.to_dict(), 'game_over': True, 'winner': state.winner},
                          turn_advances=False)

    keeps_turn = state.extra_turn_for == color
    state = replace(
        state,
        current_player=color if keeps_turn else opponent(color),
        extra_turn_for=None if keeps_turn else state.extra_turn_for,
        move_start_time=now,
    )
    return Transition(state, {'move': move.to_dict(), 'game_over': False, 'winner': None},
                      turn_advances=not keeps_turn)


def _resolve_board_change(state, color, result, now):
    """Scan the whole board after a power-up rewrote it; the acting color wins ties."""
    for candidate in (color, opponent(color)):
        if has_four(state.board, candidate):
            state = _finish_game(state, candidate, now)
            result.update(game_over=True, winner=candidate)
            return Transition(state, result, turn_advances=False)
    if is_board_full(state.board):
        state = _finish_game(state, 'draw', now)
        result.update(game_over=True, winner='draw')
        return Transition(state, result, turn_advances=False)
    state = replace(state, current_player=opponent(color), move_start_time=now)
    return Transition(state, result)


def use_power_up(state, player_id, power_up_type, target_row=None, target_col=None, now=None):
    if not state.config.power_ups_enabled:
        raise LifecycleError('Power-ups are not enabled', 'power_ups_disabled')
    require_status(state, 'playing')
    color = _require_turn(state, player_id)
    if power_up_type not in POWER_UP_TYPES:
        raise ValidationError('Unknown power-up type')
    now = now_or(now)
    result = {'power_up': power_up_type, 'game_over': False, 'winner': None}

    if power_up_type == 'extra_turn':
        power_ups = consume_power_up(state.power_ups, player_id, power_up_type, state.game_number)
        result['message'] = 'Extra turn granted'
        return Transition(replace(state, power_ups=power_ups, extra_turn_for=color), result,
                          turn_advances=False)

    if power_up_type == 'block_column':
        if target_col is None:
            raise ValidationError('Target column required for block_column power-up')
        col = _check_column(state, target_col)
        if is_column_full(state.board, col):
            raise ValidationError('Cannot block a full column')
        power_ups = consume_power_up(state.power_ups, player_id, power_up_type, state.game_number)
        state = replace(
            state,
            power_ups=power_ups,
            blocked_columns=state.blocked_columns + ((col, opponent(color)),),
        )
        result.update(message=f'Blocked column {col}', target={'col': col})
        return Transition(state, result, turn_advances=False)

    if power_up_type == 'swap_colors':
        power_ups = consume_power_up(state.power_ups, player_id, power_up_type, state.game_number)
        swapped = {YELLOW: RED, RED: YELLOW, None: None}
        board = tuple(tuple(swapped[cell] for cell in row) for row in state.board)
        result['message'] = 'Swapped all disc colors'
        return _resolve_board_change(replace(state, power_ups=power_ups, board=board), color, result, now)

    # remove_disc
    if target_row is None or target_col is None:
        raise ValidationError('Target position required for remove_disc power-up')
    row = coerce_int(target_row, 'target_row')
    col = _check_column(state, target_col)
    if not 0 <= row < len(state.board):
        raise ValidationError('Invalid row')
    if state.board[row][col] != opponent(color):
        raise ValidationError('Can only remove opponent discs')
    power_ups = consume_power_up(state.power_ups, player_id, power_up_type, state.game_number)
    rows = [list(r) for r in state.board]
    # Discs above the removed one fall by one row.
    for r in range(row, 0, -1):
        rows[r][col] = rows[r - 1][col]
    rows[0][col] = None
    board = tuple(tuple(r) for r in rows)
    result.update(message=f'Removed disc at column {col}', target={'row': row, 'col': col})
    return _resolve_board_change(replace(state, power_ups=power_ups, board=board), color, result, now)


def match_winner(state):
    needed = games_needed_to_win(state.config.best_of)
    score = state.match_score
    if score[YELLOW] >= needed:
        return YELLOW
    if score[RED] >= needed:
        return RED
    if len(state.game_results) >= state.config.best_of:
        if score[YELLOW] == score[RED]:
            return 'draw'
        return YELLOW if score[YELLOW] > score[RED] else RED
    return None


def next_game_in_series(state, now=None):
    if state.status != 'game_over':
        raise LifecycleError('Current game is not over', 'game_not_over')
    winner = match_winner(state)
    if winner:
        return Transition(replace(state, status='match_over'),
                          {'match_over': True, 'match_winner': winner}, terminal=True)

    now = now_or(now)
    state = replace(
        state,
        board=empty_board(state.config),
        current_player=YELLOW if state.game_number % 2 == 0 else RED,
        game_number=state.game_number + 1,
        moves=(),
        blocked_columns=(),
        extra_turn_for=None,
        move_start_time=now,
        game_start_time=now,
        status='playing',
        winner=None,
    )
    return Transition(state, {'match_over': False, 'game_number': state.game_number})


def has_time_limit_exceeded(state, now=None):
    if state.config.time_limit == 0 or state.status != 'playing':
        return False
    return now_or(now) - state.move_start_time > state.config.time_limit


def seconds_left(state, now=None):
    return state.config.time_limit - (now_or(now) - state.move_start_time)


def handle_time_expired(state, now=None):
    require_status(state, 'playing')
    loser = state.current_player
    state = _finish_game(state, opponent(loser), now_or(now))
    return Transition(state, {'expired_player': player_for(state, loser), 'winner': state.winner},
                      turn_advances=False)


def compute_stats(state):
    total = len(state.game_results)
    winner = match_winner(state)
    return {
        'total_games': total,
        'average_game_duration': sum(g.duration for g in state.game_results) / total if total else 0,
        'match_score': dict(state.match_score),
        'match_winner': winner,
        'match_winner_id': player_for(state, winner) if winner in (YELLOW, RED) else None,
        'games_played': total,
    }


def public_view(state):
    return {
        'game_id': GAME_ID,
        'config': state.config.to_dict(),
        'board': [list(row) for row in state.board],
        'current_player': state.current_player,
        'current_player_id': player_for(state, state.current_player),
        'colors': {YELLOW: state.player_ids[0], RED: state.player_ids[1]},
        'game_number': state.game_number,
        'match_score': dict(state.match_score),
        'moves': [m.to_dict() for m in state.moves],
        'power_ups': [p.to_dict() for p in state.power_ups],
        'blocked_columns': [{'col': c, 'for': target} for c, target in state.blocked_columns],
        'extra_turn_for': state.extra_turn_for,
        'move_start_time': state.move_start_time,
        'game_results': [g.to_dict() for g in state.game_results],
        'status': state.status,
        'winner': state.winner,
    }
