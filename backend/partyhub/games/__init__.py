from partyhub.errors import ValidationError
from . import (
    connect_four, hangman, number_guessing, rock_paper_scissors, this_or_that,
    tic_tac_toe, would_you_rather,
)

GAMES = {
    module.GAME_ID: module
    for module in (
        number_guessing,
        would_you_rather,
        this_or_that,
        tic_tac_toe,
        connect_four,
        rock_paper_scissors,
        hangman,
    )
}


def get_game(game_id):
    """Return the rule module registered under ``game_id``."""
    try:
        return GAMES[game_id]
    except KeyError:
        raise ValidationError(f'Unknown game: {game_id}', 'unknown_game')


def list_games():
    return [
        {'id': m.GAME_ID, 'name': m.NAME, 'min_players': m.MIN_PLAYERS, 'max_players': m.MAX_PLAYERS}
        for m in GAMES.values()
    ]
