import math
import time
from dataclasses import dataclass, replace
from typing import Any, Dict, NamedTuple, Optional, Tuple

from partyhub.errors import AuthorityError, LifecycleError, ValidationError


class Transition(NamedTuple):
    """Outcome of applying one action to a game state.

    ``result`` carries the event payload the hub broadcasts. ``turn_advances``
    is False when the acting player keeps the turn.
    """
    state: Any
    result: Dict[str, Any]
    terminal: bool = False
    turn_advances: bool = True


@dataclass(frozen=True)
class PowerUp:
    type: str
    player_id: str
    used: bool = False
    used_in_round: Optional[int] = None

    def to_dict(self):
        return {
            'type': self.type,
            'player_id': self.player_id,
            'used': self.used,
            'used_in_round': self.used_in_round,
        }


def now_or(now):
    return time.time() if now is None else now


def seat_players(players):
    """Return ``(player_ids, player_names)`` for an ordered player list."""
    ids = tuple(p.id for p in players)
    names = {p.id: p.name for p in players}
    return ids, names


def other_player(player_ids, player_id):
    return player_ids[1] if player_ids[0] == player_id else player_ids[0]


def require_seated(state, player_id):
    if player_id not in state.player_ids:
        raise AuthorityError('Player is not in this game', 'not_in_game')


def require_status(state, *statuses, message='Game is not in progress'):
    if state.status not in statuses:
        raise LifecycleError(message, 'game_not_active')


def coerce_int(value, field):
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a whole number')
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a whole number')
    if isinstance(value, float) and value != number:
        raise ValidationError(f'{field} must be a whole number')
    return number


def pick(data, field, allowed, default):
    value = data.get(field, default)
    if value is None:
        value = default
    if value not in allowed:
        raise ValidationError(f'Invalid {field}: {value}')
    return value


def games_needed_to_win(best_of):
    return math.ceil(best_of / 2)


def grant_power_ups(player_ids, types) -> Tuple[PowerUp, ...]:
    return tuple(PowerUp(type=t, player_id=pid) for pid in player_ids for t in types)


def consume_power_up(power_ups, player_id, power_up_type, round_number=None):
    """Mark the player's unused power-up of the given type as used.

    Raises AuthorityError when the player has no such unused power-up.
    """
    for idx, power_up in enumerate(power_ups):
        if power_up.player_id == player_id and power_up.type == power_up_type and not power_up.used:
            updated = replace(power_up, used=True, used_in_round=round_number)
            return power_ups[:idx] + (updated,) + power_ups[idx + 1:]
    raise AuthorityError('Power-up not available', 'power_up_unavailable')


def draw_question(pool, categories, rng, used_ids=()):
    """Pick a question id ``"<category>-<index>"`` from the selected categories.

    Ids in ``used_ids`` are only drawn again once every question has been used.
    """
    candidates = [f'{category}-{index}' for category in categories for index in range(len(pool[category]))]
    used = set(used_ids)
    fresh = [question_id for question_id in candidates if question_id not in used]
    return rng.choice(fresh or candidates)


def split_question_id(question_id):
    category, _, index = question_id.rpartition('-')
    return category, int(index)
