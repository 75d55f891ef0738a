import random
from dataclasses import replace

import pytest

from partyhub.errors import AuthorityError, LifecycleError, ValidationError
from partyhub.games import hangman
from partyhub.games.banks import HANGMAN_WORDS


def pvp_game(players, word='penguins', **config):
    config.setdefault('mode', 'pvp')
    state = hangman.initialize(players, hangman.parse_config(config), now=0)
    return hangman.set_word(state, 'p1', word, now=1).state


def guess(state, *letters, player_id='p2'):
    for letter in letters:
        state = hangman.guess_letter(state, player_id, letter, rng=random.Random(0), now=2).state
    return state


def test_pvp_starts_in_setup_until_a_word_is_set(players):
    state = hangman.initialize(players, hangman.parse_config({'mode': 'pvp'}), now=0)
    assert state.status == 'setup'
    with pytest.raises(LifecycleError):
        hangman.guess_letter(state, 'p2', 'A')

    step = hangman.set_word(state, 'p1', ' penguins ', now=3)
    assert step.state.word == 'PENGUINS'
    assert step.state.word_setter == 'p1'
    assert step.state.status == 'playing'
    assert step.result == {'word_setter': 'p1', 'word_length': 8}


def test_word_validation_follows_difficulty(players):
    state = hangman.initialize(players, hangman.parse_config({'mode': 'pvp', 'difficulty': 'easy'}), now=0)
    with pytest.raises(ValidationError):
        hangman.set_word(state, 'p1', 'CAT')
    with pytest.raises(ValidationError):
        hangman.set_word(state, 'p1', 'R2D2')
    with pytest.raises(ValidationError):
        hangman.set_word(state, 'p1', 'ELEPHANT')
    for word in ('ICE\tAGE', 'ICE\nAGE'):
        with pytest.raises(ValidationError):
            hangman.set_word(state, 'p1', word)
    # spaces do not count toward the length
    assert hangman.set_word(state, 'p1', 'ICE AGE').state.word == 'ICE AGE'
    assert hangman.validate_word('supercalifragilistic', 'hard') == 'SUPERCALIFRAGILISTIC'


def test_word_setter_cannot_guess(players):
    with pytest.raises(AuthorityError) as exc:
        hangman.guess_letter(pvp_game(players), 'p1', 'E')
    assert exc.value.code == 'word_setter_cannot_guess'


def test_guesses_are_single_new_letters(players):
    state = guess(pvp_game(players), 'e')
    assert hangman.masked_word(state) == '_E______'
    for bad in ('E', 'ab', '1', '', None):
        with pytest.raises(ValidationError):
            hangman.guess_letter(state, 'p2', bad)


def test_guesser_wins_pvp(players):
    state = pvp_game(players)
    step = hangman.guess_letter(guess(state, 'P', 'E', 'N', 'G', 'U', 'I'), 'p2', 'S')
    assert step.terminal
    assert step.state.status == 'won'
    assert step.state.winner == 'p2'
    stats = hangman.compute_stats(step.state)
    assert stats['accuracy'] == 100
    assert stats['is_complete'] is True
    assert stats['word'] == 'PENGUINS'


def test_setter_wins_when_the_gallows_fill(players):
    state = guess(pvp_game(players, max_wrong_guesses=2), 'Z', 'X')
    assert state.status == 'lost'
    assert state.winner == 'p1'
    assert hangman.public_view(state)['word'] == 'PENGUINS'


def test_public_view_masks_the_word_while_playing(players):
    view = hangman.public_view(guess(pvp_game(players), 'N'))
    assert view['word'] is None
    assert view['masked_word'] == '__N___N_'
    assert 'PENGUINS' not in str(view)


def test_coop_draws_from_the_bank_and_wins_as_a_team(players):
    config = hangman.parse_config({'category': 'movies', 'difficulty': 'easy'})
    state = hangman.initialize(players, config, rng=random.Random(1), now=0)
    assert state.word in HANGMAN_WORDS['movies']['easy']
    assert state.status == 'playing'

    state = replace(state, word='JAWS')
    state = guess(state, 'J', 'A', player_id='p1')
    state = guess(state, 'W', 'S', player_id='p2')
    assert state.status == 'won'
    assert state.winner == 'team'


def test_extra_guess_adds_an_allowed_wrong_guess(players):
    state = pvp_game(players, max_wrong_guesses=1, power_ups_enabled=True)
    step = hangman.guess_letter(state, 'p2', 'Z', 'extra_guess')
    assert step.state.status == 'playing'
    assert step.state.allowed_wrong_guesses == 2


def test_reveal_letter_uncovers_another_letter(players):
    state = pvp_game(players, power_ups_enabled=True)
    step = hangman.guess_letter(state, 'p2', 'E', 'reveal_letter', rng=random.Random(2))
    assert len(step.state.guessed_letters) == 2
    assert step.state.guessed_letters[-1] == 'E'
    assert step.state.guessed_letters[0] in 'PNGUIS'


def test_remove_wrong_takes_back_the_last_miss(players):
    state = guess(pvp_game(players, power_ups_enabled=True), 'Z')
    step = hangman.guess_letter(state, 'p2', 'X', 'remove_wrong')
    assert step.state.wrong_guess_count == 1
    assert step.state.wrong_guesses == ('X',)
    with pytest.raises(AuthorityError):
        hangman.guess_letter(step.state, 'p2', 'Q', 'remove_wrong')


def test_timeout_counts_as_a_wrong_guess(players):
    state = pvp_game(players, time_limit=30, max_wrong_guesses=1)
    assert hangman.has_time_limit_exceeded(state, now=32)
    step = hangman.handle_time_expired(state, now=32)
    assert step.terminal
    assert step.state.status == 'lost'
    assert hangman.public_view(step.state)['wrong_guesses'] == []
