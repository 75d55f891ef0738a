import pytest

from partyhub.errors import AuthorityError, LifecycleError, ValidationError
from partyhub.games import tic_tac_toe as ttt


def new_game(players, **config):
    return ttt.initialize(players, ttt.parse_config(config), now=0)


def play(state, *moves):
    """Apply alternating moves given as (player_id, row, col)."""
    for player_id, row, col in moves:
        state = ttt.make_move(state, player_id, row, col, now=1).state
    return state


def test_row_win_scores_the_match(players):
    state = play(new_game(players), ('p1', 0, 0), ('p2', 1, 0), ('p1', 0, 1), ('p2', 1, 1))
    step = ttt.make_move(state, 'p1', 0, 2, now=5)
    assert step.result['game_over'] is True
    assert step.state.winner == 'X'
    assert step.state.status == 'game_over'
    assert step.state.match_score == {'X': 1, 'O': 0, 'draws': 0}
    assert step.turn_advances is False


def test_column_and_diagonal_wins_on_larger_boards(players):
    board = ttt.empty_board(4)
    rows = [list(r) for r in board]
    for r in range(4):
        rows[r][2] = 'O'
    assert ttt.check_winner(tuple(tuple(r) for r in rows)) == 'O'

    rows = [list(r) for r in ttt.empty_board(5)]
    for i in range(5):
        rows[i][4 - i] = 'X'
    assert ttt.check_winner(tuple(tuple(r) for r in rows)) == 'X'
    rows[2][2] = 'O'
    assert ttt.check_winner(tuple(tuple(r) for r in rows)) is None


def test_full_board_is_a_draw(players):
    state = play(
        new_game(players),
        ('p1', 0, 0), ('p2', 0, 1), ('p1', 0, 2),
        ('p2', 1, 1), ('p1', 1, 0), ('p2', 1, 2),
        ('p1', 2, 1), ('p2', 2, 0),
    )
    step = ttt.make_move(state, 'p1', 2, 2)
    assert step.state.winner == 'draw'
    assert step.state.match_score['draws'] == 1


def test_turns_alternate_and_cells_are_validated(players):
    state = new_game(players)
    with pytest.raises(AuthorityError) as exc:
        ttt.make_move(state, 'p2', 0, 0)
    assert exc.value.code == 'not_your_turn'

    state = play(state, ('p1', 1, 1))
    assert state.current_player == 'O'
    with pytest.raises(ValidationError):
        ttt.make_move(state, 'p2', 1, 1)
    with pytest.raises(ValidationError):
        ttt.make_move(state, 'p2', 3, 0)
    with pytest.raises(AuthorityError):
        ttt.make_move(state, 'p3', 0, 0)


def test_series_alternates_starting_player(players):
    state = play(new_game(players, best_of=3), ('p1', 0, 0), ('p2', 1, 0), ('p1', 0, 1), ('p2', 1, 1), ('p1', 0, 2))
    with pytest.raises(LifecycleError):
        ttt.next_game_in_series(play(new_game(players), ('p1', 0, 0)))

    step = ttt.next_game_in_series(state, now=10)
    assert not step.terminal
    assert step.state.game_number == 2
    assert step.state.current_player == 'O'
    assert step.state.board == ttt.empty_board(3)
    assert step.state.match_score['X'] == 1


def test_match_ends_when_games_needed_are_won(players):
    win_for_x = (('p1', 0, 0), ('p2', 1, 0), ('p1', 0, 1), ('p2', 1, 1), ('p1', 0, 2))
    state = play(new_game(players, best_of=3), *win_for_x)
    state = ttt.next_game_in_series(state).state
    # O opens game two; X still takes the top row
    state = play(state, ('p2', 2, 2), *win_for_x)
    assert ttt.match_winner(state) == 'X'
    step = ttt.next_game_in_series(state)
    assert step.terminal
    assert step.state.status == 'match_over'
    stats = ttt.compute_stats(step.state)
    assert stats['match_winner'] == 'X'
    assert stats['match_winner_id'] == 'p1'
    assert stats['total_games'] == 2


def test_extra_turn_keeps_the_turn_once(players):
    state = new_game(players, power_ups_enabled=True)
    step = ttt.use_power_up(state, 'p1', 'extra_turn')
    assert step.turn_advances is False
    state = play(step.state, ('p1', 0, 0))
    assert state.current_player == 'X'
    state = play(state, ('p1', 2, 2))
    assert state.current_player == 'O'
    with pytest.raises(AuthorityError) as exc:
        ttt.use_power_up(play(state, ('p2', 1, 1)), 'p1', 'extra_turn')
    assert exc.value.code == 'power_up_unavailable'


def test_block_stops_the_opponent_for_one_move(players):
    state = new_game(players, power_ups_enabled=True)
    state = ttt.use_power_up(state, 'p1', 'block', 1, 1).state
    assert state.current_player == 'X'
    state = play(state, ('p1', 0, 0))
    with pytest.raises(ValidationError):
        ttt.make_move(state, 'p2', 1, 1)
    state = play(state, ('p2', 2, 2), ('p1', 0, 1))
    # The block expired after O's move
    assert ttt.make_move(state, 'p2', 1, 1).state.board[1][1] == 'O'


def test_steal_takes_a_cell_and_can_win(players):
    state = play(new_game(players, power_ups_enabled=True),
                 ('p1', 0, 0), ('p2', 0, 1), ('p1', 0, 2), ('p2', 2, 2))
    with pytest.raises(ValidationError):
        ttt.use_power_up(state, 'p1', 'steal', 0, 0)
    step = ttt.use_power_up(state, 'p1', 'steal', 0, 1)
    assert step.result['game_over'] is True
    assert step.state.winner == 'X'


def test_power_ups_disabled_by_default(players):
    with pytest.raises(LifecycleError):
        ttt.use_power_up(new_game(players), 'p1', 'extra_turn')


def test_time_expiry_forfeits_the_game(players):
    state = new_game(players, time_limit=10)
    assert not ttt.has_time_limit_exceeded(state, now=10)
    assert ttt.has_time_limit_exceeded(state, now=10.5)
    step = ttt.handle_time_expired(state, now=11)
    assert step.result['expired_player'] == 'p1'
    assert step.state.winner == 'O'
    assert step.state.match_score['O'] == 1


def test_public_view_lists_symbols(players):
    view = ttt.public_view(new_game(players, board_size=4))
    assert view['symbols'] == {'X': 'p1', 'O': 'p2'}
    assert len(view['board']) == 4
    assert view['current_player_id'] == 'p1'
