"""Tic-tac-toe played as a best-of-N match, with optional power-ups.

Player 0 plays X and player 1 plays O. The player who opens each game
alternates. A game is won by filling a whole row, column or diagonal.
"""
import random
from dataclasses import dataclass, replace
from typing import ClassVar, Dict, Optional, Tuple

from partyhub.errors import AuthorityError, LifecycleError, ValidationError
from .common import (
    Transition, coerce_int, consume_power_up, games_needed_to_win, grant_power_ups,
    now_or, pick, require_seated, require_status, seat_players,
)

GAME_ID = 'tic-tac-toe'
NAME = 'Tic-Tac-Toe'
MIN_PLAYERS = 2
MAX_PLAYERS = 2
BOARD_SIZES = (3, 4, 5)
BEST_OF = (1, 3, 5, 7)
POWER_UP_TYPES = ('steal', 'block', 'extra_turn')


@dataclass(frozen=True)
class Config:
    board_size: int = 3
    best_of: int = 3
    time_limit: int = 0
    power_ups_enabled: bool = False

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
        board_size=pick(data, 'board_size', BOARD_SIZES, 3),
        best_of=pick(data, 'best_of', BEST_OF, 3),
        time_limit=time_limit,
        power_ups_enabled=bool(data.get('power_ups_enabled', False)),
    )


@dataclass(frozen=True)
class Move:
    row: int
    col: int
    player: str
    timestamp: float

    def to_dict(self):
        return {'row': self.row, 'col': self.col, 'player': self.player, 'timestamp': self.timestamp}


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
    # (row, col, symbol that may not play there)
    blocked_cell: Optional[Tuple[int, int, str]] = None
    extra_turn_for: Optional[str] = None
    game_results: Tuple[GameResult, ...] = ()
    status: str = 'playing'
    winner: Optional[str] = None


def empty_board(size):
    return tuple(tuple(None for _ in range(size)) for _ in range(size))


def symbol_for(state, player_id):
    require_seated(state, player_id)
    return 'X' if state.player_ids[0] == player_id else 'O'


def player_for(state, symbol):
    return state.player_ids[0] if symbol == 'X' else state.player_ids[1]


def opponent(symbol):
    return 'O' if symbol == 'X' else 'X'


def initialize(players, config=None, rng=random, now=None):
    config = config or Config()
    player_ids, player_names = seat_players(players)
    started = now_or(now)
    power_ups = grant_power_ups(player_ids, POWER_UP_TYPES) if config.power_ups_enabled else ()
    return State(
        config=config,
        player_ids=player_ids,
        player_names=player_names,
        board=empty_board(config.board_size),
        current_player='X',
        game_number=1,
        match_score={'X': 0, 'O': 0, 'draws': 0},
        move_start_time=started,
        game_start_time=started,
        power_ups=power_ups,
    )


def check_winner(board):
    size = len(board)
    lines = [list(row) for row in board]
    lines += [[board[r][c] for r in range(size)] for c in range(size)]
    lines.append([board[i][i] for i in range(size)])
    lines.append([board[i][size - 1 - i] for i in range(size)])
    for line in lines:
        if line[0] is not None and all(cell == line[0] for cell in line):
            return line[0]
    return None


def is_board_full(board):
    return all(cell is not None for row in board for cell in row)


def _set_cell(board, row, col, value):
    rows = [list(r) for r in board]
    rows[row][col] = value
    return tuple(tuple(r) for r in rows)


def _check_target(state, row, col):
    size = state.config.board_size
    row = coerce_int(row, 'row')
    col = coerce_int(col, 'col')
    if not (0 <= row < size and 0 <= col < size):
        raise ValidationError('Invalid move position')
    return row, col


def _require_turn(state, player_id):
    symbol = symbol_for(state, player_id)
    if state.current_player != symbol:
        raise AuthorityError('Not your turn', 'not_your_turn')
    return symbol


def _finish_game(state, winner, now):
    """Close the current game with ``winner`` ('X', 'O' or 'draw')."""
    score = dict(state.match_score)
    score['draws' if winner == 'draw' else winner] += 1
    result = GameResult(state.game_number, winner, state.moves, now - state.game_start_time)
    return replace(
        state,
        match_score=score,
        game_results=state.game_results + (result,),
        blocked_cell=None,
        extra_turn_for=None,
        status='game_over',
        winner=winner,
    )


def make_move(state, player_id, row, col, now=None):
    require_status(state, 'playing')
    symbol = _require_turn(state, player_id)
    row, col = _check_target(state, row, col)
    blocked = state.blocked_cell
    if blocked and blocked[2] == symbol and (blocked[0], blocked[1]) == (row, col):
        empty_cells = sum(1 for r in state.board for cell in r if cell is None)
        if empty_cells > 1:
            raise ValidationError('This cell is blocked')
    if state.board[row][col] is not None:
        raise ValidationError('Cell is already occupied')

    now = now_or(now)
    move = Move(row, col, symbol, now)
    board = _set_cell(state.board, row, col, symbol)
    # A block only lasts for the blocked player's next move.
    if blocked and blocked[2] == symbol:
        blocked = None
    state = replace(state, board=board, moves=state.moves + (move,), blocked_cell=blocked)

    winner = check_winner(board)
    if winner or is_board_full(board):
        state = _finish_game(state, winner or 'draw', now)
        return Transition(state, {'move': move.to_dict(), 'game_over': True, 'winner': state.winner},
                          turn_advances=False)

    keeps_turn = state.extra_turn_for == symbol
    state = replace(
        state,
        current_player=symbol if keeps_turn else opponent(symbol),
        extra_turn_for=None if keeps_turn else state.extra_turn_for,
        move_start_time=now,
    )
    return Transition(state, {'move': move.to_dict(), 'game_over': False, 'winner': None},
                      turn_advances=not keeps_turn)


def use_power_up(state, player_id, power_up_type, target_row=None, target_col=None, now=None):
    if not state.config.power_ups_enabled:
        raise LifecycleError('Power-ups are not enabled', 'power_ups_disabled')
    require_status(state, 'playing')
    symbol = _require_turn(state, player_id)
    if power_up_type not in POWER_UP_TYPES:
        raise ValidationError('Unknown power-up type')
    now = now_or(now)

    if power_up_type == 'extra_turn':
        power_ups = consume_power_up(state.power_ups, player_id, power_up_type, state.game_number)
        state = replace(state, power_ups=power_ups, extra_turn_for=symbol)
        return Transition(state, {'power_up': power_up_type, 'message': 'Extra turn granted'},
                          turn_advances=False)

    if target_row is None or target_col is None:
        raise ValidationError(f'Target position required for {power_up_type} power-up')
    row, col = _check_target(state, target_row, target_col)

    if power_up_type == 'block':
        if state.board[row][col] is not None:
            raise ValidationError('Can only block empty cells')
        power_ups = consume_power_up(state.power_ups, player_id, power_up_type, state.game_number)
        state = replace(state, power_ups=power_ups, blocked_cell=(row, col, opponent(symbol)))
        return Transition(state, {
            'power_up': power_up_type,
            'message': f'Blocked cell at ({row}, {col})',
            'target': {'row': row, 'col': col},
        }, turn_advances=False)

    # steal
    if state.board[row][col] != opponent(symbol):
        raise ValidationError('Can only steal opponent cells')
    power_ups = consume_power_up(state.power_ups, player_id, power_up_type, state.game_number)
    board = _set_cell(state.board, row, col, symbol)
    state = replace(state, power_ups=power_ups, board=board)
    result = {
        'power_up': power_up_type,
        'message': f'Stole cell at ({row}, {col})',
        'target': {'row': row, 'col': col},
        'game_over': False,
        'winner': None,
    }
    winner = check_winner(board)
    if winner:
        state = _finish_game(state, winner, now)
        result.update(game_over=True, winner=winner)
        return Transition(state, result, turn_advances=False)
    state = replace(state, current_player=opponent(symbol), move_start_time=now)
    return Transition(state, result)


def match_winner(state):
    needed = games_needed_to_win(state.config.best_of)
    score = state.match_score
    if score['X'] >= needed:
        return 'X'
    if score['O'] >= needed:
        return 'O'
    if len(state.game_results) >= state.config.best_of:
        if score['X'] == score['O']:
            return 'draw'
        return 'X' if score['X'] > score['O'] else 'O'
    return None


def next_game_in_series(state, now=None):
    if state.status != 'game_over':
        raise LifecycleError('Current game is not over', 'game_not_over')
    if match_winner(state):
        state = replace(state, status='match_over')
        return Transition(state, {'match_over': True, 'match_winner': match_winner(state)}, terminal=True)

    now = now_or(now)
    starting = 'X' if state.game_number % 2 == 0 else 'O'
    state = replace(
        state,
        board=empty_board(state.config.board_size),
        current_player=starting,
        game_number=state.game_number + 1,
        moves=(),
        blocked_cell=None,
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
    """The player on the clock forfeits the current game."""
    require_status(state, 'playing')
    loser = state.current_player
    state = _finish_game(state, opponent(loser), now_or(now))
    return Transition(state, {'expired_player': player_for(state, loser), 'winner': state.winner},
                      turn_advances=False)


def compute_stats(state):
    total = len(state.game_results)
    average = sum(g.duration for g in state.game_results) / total if total else 0
    winner = match_winner(state)
    return {
        'total_games': total,
        'average_game_duration': average,
        'match_score': dict(state.match_score),
        'match_winner': winner,
        'match_winner_id': player_for(state, winner) if winner in ('X', 'O') else None,
        'games_played': total,
    }


def public_view(state):
    blocked = state.blocked_cell
    return {
        'game_id': GAME_ID,
        'config': state.config.to_dict(),
        'board': [list(row) for row in state.board],
        'current_player': state.current_player,
        'current_player_id': player_for(state, state.current_player),
        'symbols': {'X': state.player_ids[0], 'O': state.player_ids[1]},
        'game_number': state.game_number,
        'match_score': dict(state.match_score),
        'moves': [m.to_dict() for m in state.moves],
        'power_ups': [p.to_dict() for p in state.power_ups],
        'blocked_cell': {'row': blocked[0], 'col': blocked[1], 'for': blocked[2]} if blocked else None,
        'extra_turn_for': state.extra_turn_for,
        'move_start_time': state.move_start_time,
        'game_results': [g.to_dict() for g in state.game_results],
        'status': state.status,
        'winner': state.winner,
    }
