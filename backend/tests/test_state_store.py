from partyhub.games import number_guessing
from partyhub.services.state_store import GameStateStore


def test_set_get_delete(players):
    store = GameStateStore()
    state = number_guessing.initialize(players, now=0)
    store.set('ROOM01', state)
    assert store.get('ROOM01') is state
    assert store.has('ROOM01')
    assert len(store) == 1

    store.delete('ROOM01')
    store.delete('ROOM01')
    assert store.get('ROOM01') is None
    assert not store.has('ROOM01')


def test_update_patches_the_stored_state(players):
    store = GameStateStore()
    store.set('ROOM01', number_guessing.initialize(players, now=0))
    first = store.update('ROOM01', target_number=7)
    second = store.update('ROOM01', current_turn='p2')
    # Back-to-back patches both land on the latest state
    assert second.target_number == 7
    assert second.current_turn == 'p2'
    assert store.get('ROOM01') is second
    assert first is not second
    assert store.update('MISSING', target_number=1) is None
