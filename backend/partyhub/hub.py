"""Connection-event handling for rooms and games.

Every inbound event goes through :meth:`GameHub.dispatch`, which runs the
handler to completion under one process-wide lock. Handlers resolve the room
and game state, check that the caller may act, apply a pure transition from
the game's rule module, store the new state and fan the result out to the
room's broadcast group.
"""
import random
import threading
import time

from partyhub.errors import (
    AuthorityError, GameHubError, InternalError, LifecycleError, NotFoundError, ValidationError,
)
from partyhub.games import (
    connect_four, get_game, hangman, number_guessing, rock_paper_scissors, this_or_that,
    tic_tac_toe, would_you_rather,
)
from partyhub.games.common import coerce_int

ADVANCE = 'advance'
TIMEOUT = 'timeout'
SERIES_GAMES = (tic_tac_toe, connect_four)
TIMED_GAMES = (tic_tac_toe, connect_four, rock_paper_scissors, hangman)
MAX_NAME_LENGTH = 30
MAX_ROOM_NAME_LENGTH = 64


class GameHub:
    def __init__(self, rooms, states, registry, transport, scheduler, config=None, logger=None,
                 rng=random, clock=time.time, lock=None):
        self.rooms = rooms
        self.states = states
        self.registry = registry
        self.transport = transport
        self.scheduler = scheduler
        self.config = config or {}
        self.logger = logger
        self.rng = rng
        self.clock = clock
        self.lock = lock or threading.RLock()
        self._player_sids = {}
        self._sid_players = {}
        self.handlers = {
            'create_room': self.on_create_room,
            'join_room': self.on_join_room,
            'leave_room': self.on_leave_room,
            'set_ready': self.on_set_ready,
            'start_game': self.on_start_game,
            'play_again': self.on_play_again,
            'change_game': self.on_change_game,
            'make_guess': self.on_make_guess,
            'submit_choice': self.on_submit_choice,
            'next_question': self.on_next_question,
            'submit_this_or_that_choice': self.on_submit_this_or_that_choice,
            'make_move': self.on_make_move,
            'connect_4_make_move': self.on_connect_4_make_move,
            'use_power_up': self.on_use_power_up,
            'next_game_in_series': self.on_next_game_in_series,
            'rps_submit_choice': self.on_rps_submit_choice,
            'hangman_set_word': self.on_hangman_set_word,
            'hangman_guess_letter': self.on_hangman_guess_letter,
            'create_permanent_room': self.on_create_permanent_room,
            'get_my_room': self.on_get_my_room,
            'get_public_rooms': self.on_get_public_rooms,
            'update_room_name': self.on_update_room_name,
            'kick_player': self.on_kick_player,
        }

    # ---- dispatch ----

    def dispatch(self, event, sid, data=None, account=None):
        handler = self.handlers.get(event)
        with self.lock:
            try:
                if handler is None:
                    raise ValidationError(f'Unknown event: {event}', 'unknown_event')
                if data is not None and not isinstance(data, dict):
                    raise ValidationError('Payload must be an object', 'invalid_payload')
                handler(sid, data or {}, account)
            except GameHubError as exc:
                self.logger.warning(f"[client-error] event={event} sid={sid} code={exc.code} message={exc.message}")
                self.transport.send(sid, 'error', exc.to_dict())
            except Exception:
                self.logger.exception(f"[hub-error] event={event} sid={sid}")
                self.transport.send(sid, 'error', InternalError('Internal server error').to_dict())

    def disconnect(self, sid):
        with self.lock:
            for player_id in list(self._sid_players.pop(sid, ())):
                self._player_sids.pop(player_id, None)
                for room in self.rooms.rooms_for_player(player_id):
                    self._remove_player(room.id, player_id)
            self.logger.info(f"[disconnect] sid={sid}")

    # ---- bindings and lookups ----

    def _bind(self, sid, player_id):
        previous = self._player_sids.get(player_id)
        if previous and previous != sid:
            self._sid_players.get(previous, set()).discard(player_id)
        self._player_sids[player_id] = sid
        self._sid_players.setdefault(sid, set()).add(player_id)

    def _unbind(self, player_id):
        sid = self._player_sids.pop(player_id, None)
        if sid is not None:
            self._sid_players.get(sid, set()).discard(player_id)
        return sid

    def sid_for(self, player_id):
        return self._player_sids.get(player_id)

    def _require_actor(self, sid, room, player_id):
        if not player_id or self._player_sids.get(player_id) != sid:
            raise AuthorityError('Player does not belong to this connection', 'not_your_player')
        player = room.find_player(player_id)
        if player is None:
            raise AuthorityError('Player is not in this room', 'not_in_room')
        return player

    def _require_member(self, sid, room):
        for player in room.players:
            if self._player_sids.get(player.id) == sid:
                return player
        raise AuthorityError('You are not in this room', 'not_in_room')

    @staticmethod
    def _require_account(account):
        if account is None:
            raise AuthorityError('Authentication required', 'auth_required')
        return account

    def _load(self, room_id, module):
        room = self.rooms.require_room(room_id)
        state = self.states.get(room.id)
        if state is None or state.GAME_ID != module.GAME_ID:
            raise NotFoundError('Game not found', 'game_not_found')
        return room, state

    def _game_payload(self, room, state, **extra):
        module = get_game(state.GAME_ID)
        payload = {'room': room.to_dict(), 'game_state': module.public_view(state)}
        payload.update(extra)
        return payload

    @staticmethod
    def _text(data, field, max_length, required=True):
        value = data.get(field)
        if value is None and not required:
            return None
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(f'{field} is required')
        value = value.strip()
        if len(value) > max_length:
            raise ValidationError(f'{field} must be at most {max_length} characters')
        return value

    def _teardown_game(self, room_id):
        self.states.delete(room_id)
        self.scheduler.cancel_room(room_id)

    def _finish(self, room):
        self.rooms.update_status(room.id, 'finished')
        self.scheduler.cancel((room.id, TIMEOUT))
        self.logger.info(f"[game-finished] room={room.id} game={room.game_id}")

    def _remove_player(self, room_id, player_id):
        room = self.rooms.get_room(room_id)
        if room is None or room.find_player(player_id) is None:
            return
        state = self.states.get(room_id)
        updated = self.rooms.leave_room(room_id, player_id)
        if self.rooms.get_room(room_id) is None:
            self._teardown_game(room_id)
            self.logger.info(f"[room-closed] room={room_id}")
            return
        aborted = False
        if state is not None and updated.status == 'playing' and player_id in state.player_ids:
            # A seated player left mid-game; the remaining players go back to the lobby.
            self._teardown_game(room_id)
            self.rooms.update_status(room_id, 'waiting')
            aborted = True
        self.transport.broadcast(room_id, 'player_left', {
            'player_id': player_id,
            'room': updated.to_dict(),
            'game_aborted': aborted,
        })

    # ---- room lifecycle ----

    def on_create_room(self, sid, data, account):
        name = self._text(data, 'player_name', MAX_NAME_LENGTH)
        game_id = get_game(data.get('game_id')).GAME_ID
        room, player = self.rooms.create_room(game_id, name, owner_account_id=account.id if account else None)
        self._bind(sid, player.id)
        self.transport.join(sid, room.id)
        self.transport.send(sid, 'room_created', {'room': room.to_dict(), 'player_id': player.id})
        self.logger.info(f"[room-created] room={room.id} game={game_id} player={player.id}")

    def on_join_room(self, sid, data, account):
        room_id = self._text(data, 'room_id', MAX_ROOM_NAME_LENGTH)
        name = self._text(data, 'player_name', MAX_NAME_LENGTH)
        if self.rooms.get_room(room_id) is None and self.rooms.get_room(room_id.upper()) is not None:
            room_id = room_id.upper()
        room, player = self.rooms.join_room(room_id, name, account.id if account else None)
        self._bind(sid, player.id)
        self.transport.join(sid, room.id)
        self.transport.send(sid, 'room_joined', {'room': room.to_dict(), 'player_id': player.id})
        self.transport.broadcast(room.id, 'player_joined', {'player': player.to_dict(), 'room': room.to_dict()})
        self.logger.info(f"[room-joined] room={room.id} player={player.id}")

    def on_leave_room(self, sid, data, account):
        room_id = data.get('room_id')
        player_id = data.get('player_id')
        room = self.rooms.get_room(room_id)
        # Leaving twice, or leaving a room that is already gone, is a no-op.
        if room is not None and room.find_player(player_id) is not None:
            self._require_actor(sid, room, player_id)
            self._remove_player(room.id, player_id)
            if not self.rooms.rooms_for_player(player_id):
                self._unbind(player_id)
        if room_id:
            self.transport.leave(sid, room_id)
        self.transport.send(sid, 'room_left', {'room_id': room_id, 'player_id': player_id})

    def on_set_ready(self, sid, data, account):
        room = self.rooms.require_room(data.get('room_id'))
        player = self._require_actor(sid, room, data.get('player_id'))
        self.rooms.set_player_ready(room.id, player.id, bool(data.get('is_ready', True)))
        self.transport.broadcast(room.id, 'room_updated', {'room': room.to_dict()})

    def on_start_game(self, sid, data, account):
        room = self.rooms.require_room(data.get('room_id'))
        self._require_member(sid, room)
        if room.status == 'playing':
            raise LifecycleError('Game already in progress', 'game_in_progress')
        module = get_game(room.game_id)
        if len(room.players) < max(2, module.MIN_PLAYERS):
            raise ValidationError('Need at least 2 players to start', 'not_enough_players')
        if len(room.players) > module.MAX_PLAYERS:
            raise ValidationError(f'{module.NAME} is for at most {module.MAX_PLAYERS} players', 'too_many_players')
        config = module.parse_config(data.get('config'))
        self._start(room, module, config, 'game_started')

    def _start(self, room, module, config, event):
        state = module.initialize(room.players, config, rng=self.rng, now=self.clock())
        self.scheduler.cancel_room(room.id)
        self.states.set(room.id, state)
        self.rooms.update_status(room.id, 'playing')
        self.transport.broadcast(room.id, event, self._game_payload(room, state))
        self._arm_timeout(room.id, state)
        self.logger.info(f"[{event.replace('_', '-')}] room={room.id} game={module.GAME_ID}")

    def on_play_again(self, sid, data, account):
        room = self.rooms.require_room(data.get('room_id'))
        self._require_member(sid, room)
        module = get_game(room.game_id)
        state = self.states.get(room.id)
        if state is None or state.GAME_ID != module.GAME_ID:
            raise NotFoundError('Game not found', 'game_not_found')
        if room.status == 'playing':
            raise LifecycleError('Game is still in progress', 'game_in_progress')
        if len(room.players) < max(2, module.MIN_PLAYERS) or len(room.players) > module.MAX_PLAYERS:
            raise ValidationError('Wrong number of players for this game', 'player_count')
        self._start(room, module, state.config, 'game_reset')

    def on_change_game(self, sid, data, account):
        room = self.rooms.require_room(data.get('room_id'))
        self._require_member(sid, room)
        if room.is_permanent and (account is None or account.id != room.owner_id):
            raise AuthorityError('Only the room owner can change the game', 'not_owner')
        module = get_game(data.get('new_game_id'))
        config = data.get('config')
        if config is not None:
            config = module.parse_config(config).to_dict()
        self.rooms.change_game(room.id, module.GAME_ID)
        self._teardown_game(room.id)
        self.transport.broadcast(room.id, 'game_changed', {
            'room': room.to_dict(),
            'new_game_id': module.GAME_ID,
            'config': config,
        })
        self.logger.info(f"[game-changed] room={room.id} game={module.GAME_ID}")

    # ---- number guessing ----

    def on_make_guess(self, sid, data, account):
        room, state = self._load(data.get('room_id'), number_guessing)
        player = self._require_actor(sid, room, data.get('player_id'))
        result = number_guessing.make_guess(state, player.id, data.get('guess'), now=self.clock())
        state = result.state
        self.states.set(room.id, state)
        self.transport.broadcast(room.id, 'guess_result', self._game_payload(room, state, **result.result))
        if result.terminal:
            self._finish(room)
            self.transport.broadcast(room.id, 'game_finished', self._game_payload(
                room, state,
                winner=state.winner,
                winner_name=state.player_names.get(state.winner),
                target_number=state.target_number,
                stats=number_guessing.compute_stats(state),
            ))
        else:
            self.transport.broadcast(room.id, 'turn_changed', {
                'current_turn': state.current_turn,
                'current_player_name': state.player_names[state.current_turn],
            })

    # ---- simultaneous-choice games ----

    def _submit_pair_choice(self, sid, data, module, private_event, reveal_event, delay_key):
        room, state = self._load(data.get('room_id'), module)
        player = self._require_actor(sid, room, data.get('player_id'))
        result = module.submit_choice(state, player.id, data.get('choice'), now=self.clock())
        self.states.set(room.id, result.state)
        self.transport.send(sid, private_event, {'choice': result.result['choice']})
        if result.result['both_chosen']:
            self.transport.broadcast(room.id, reveal_event, self._game_payload(
                room, result.state, round_result=result.result['round_result'],
            ))
            delay = self.config.get(delay_key, 3)
            self.scheduler.schedule((room.id, ADVANCE), delay,
                                    lambda: self._auto_next_question(room.id, module))

    def on_submit_choice(self, sid, data, account):
        self._submit_pair_choice(sid, data, would_you_rather, 'choice_submitted', 'choices_revealed',
                                 'WOULD_YOU_RATHER_ADVANCE_SEC')

    def on_submit_this_or_that_choice(self, sid, data, account):
        self._submit_pair_choice(sid, data, this_or_that, 'this_or_that_choice_submitted',
                                 'this_or_that_round_complete', 'THIS_OR_THAT_ADVANCE_SEC')

    def on_next_question(self, sid, data, account):
        room = self.rooms.require_room(data.get('room_id'))
        self._require_member(sid, room)
        module = get_game(room.game_id)
        if module not in (would_you_rather, this_or_that):
            raise ValidationError('This game has no questions', 'wrong_game')
        room, state = self._load(room.id, module)
        self.scheduler.cancel((room.id, ADVANCE))
        self._apply_next_question(room, state, module)

    def _auto_next_question(self, room_id, module):
        room = self.rooms.get_room(room_id)
        state = self.states.get(room_id)
        if room is None or state is None or state.GAME_ID != module.GAME_ID or state.status != 'revealing':
            return
        self._apply_next_question(room, state, module)

    def _apply_next_question(self, room, state, module):
        result = module.next_question(state, rng=self.rng, now=self.clock())
        state = result.state
        self.states.set(room.id, state)
        if result.terminal:
            self._finish(room)
            self.transport.broadcast(room.id, 'game_finished', self._game_payload(
                room, state, stats=module.compute_stats(state),
            ))
            return
        event = 'next_question' if module is would_you_rather else 'this_or_that_auto_next'
        self.transport.broadcast(room.id, event, self._game_payload(
            room, state, round=result.result['round'], question=result.result['question'],
        ))

    # ---- series games: tic-tac-toe and connect 4 ----

    def _series_game_over(self, room, state, module):
        over_event = 'tic_tac_toe_game_over' if module is tic_tac_toe else 'connect_4_game_over'
        self.scheduler.cancel((room.id, TIMEOUT))
        self.transport.broadcast(room.id, over_event, self._game_payload(
            room, state, winner=state.winner, match_score=dict(state.match_score),
            stats=module.compute_stats(state),
        ))
        if module.match_winner(state):
            self._close_series(room, module.next_game_in_series(state, now=self.clock()).state, module)

    def _close_series(self, room, state, module):
        self.states.set(room.id, state)
        self._finish(room)
        stats = module.compute_stats(state)
        self.transport.broadcast(room.id, 'match_over', self._game_payload(
            room, state, match_winner=stats['match_winner'], stats=stats,
        ))

    def _after_series_action(self, room, result, module, event):
        state = result.state
        previous = self.states.get(room.id)
        self.states.set(room.id, state)
        self.transport.broadcast(room.id, event, self._game_payload(room, state, **result.result))
        if state.status == 'game_over':
            self._series_game_over(room, state, module)
        elif result.turn_advances or state.move_start_time != previous.move_start_time:
            self._arm_timeout(room.id, state)

    def on_make_move(self, sid, data, account):
        room, state = self._load(data.get('room_id'), tic_tac_toe)
        player = self._require_actor(sid, room, data.get('player_id'))
        result = tic_tac_toe.make_move(state, player.id, data.get('row'), data.get('col'), now=self.clock())
        self._after_series_action(room, result, tic_tac_toe, 'move_made')

    def on_connect_4_make_move(self, sid, data, account):
        room, state = self._load(data.get('room_id'), connect_four)
        player = self._require_actor(sid, room, data.get('player_id'))
        result = connect_four.make_move(state, player.id, data.get('col'), now=self.clock())
        self._after_series_action(room, result, connect_four, 'connect_4_move_made')

    def on_use_power_up(self, sid, data, account):
        room = self.rooms.require_room(data.get('room_id'))
        module = get_game(room.game_id)
        if module not in (tic_tac_toe, connect_four, rock_paper_scissors):
            raise ValidationError('Power-ups cannot be used this way in this game', 'wrong_game')
        room, state = self._load(room.id, module)
        player = self._require_actor(sid, room, data.get('player_id'))
        power_up_type = data.get('power_up_type')

        if module is rock_paper_scissors:
            result = module.use_power_up(state, player.id, power_up_type, now=self.clock())
            self.states.set(room.id, result.state)
            # The revealed choice goes to the caller only.
            self.transport.send(sid, 'power_up_used', dict(result.result, player_id=player.id))
            self.transport.broadcast(room.id, 'power_up_used', self._game_payload(
                room, result.state, player_id=player.id, power_up_type=power_up_type,
            ))
            return

        result = module.use_power_up(state, player.id, power_up_type, data.get('target_row'),
                                     data.get('target_col'), now=self.clock())
        self._after_series_action(room, result._replace(result=dict(
            result.result, player_id=player.id, power_up_type=power_up_type,
        )), module, 'power_up_used')

    def on_next_game_in_series(self, sid, data, account):
        room = self.rooms.require_room(data.get('room_id'))
        self._require_member(sid, room)
        module = get_game(room.game_id)
        if module not in SERIES_GAMES:
            raise ValidationError('This game is not played in series', 'wrong_game')
        room, state = self._load(room.id, module)
        result = module.next_game_in_series(state, now=self.clock())
        if result.terminal:
            self._close_series(room, result.state, module)
            return
        self.states.set(room.id, result.state)
        self.transport.broadcast(room.id, 'game_started', self._game_payload(room, result.state))
        self._arm_timeout(room.id, result.state)

    # ---- rock paper scissors ----

    def on_rps_submit_choice(self, sid, data, account):
        room, state = self._load(data.get('room_id'), rock_paper_scissors)
        player = self._require_actor(sid, room, data.get('player_id'))
        result = rock_paper_scissors.submit_choice(
            state, player.id, data.get('choice'), data.get('power_up_type'), now=self.clock(),
        )
        self.states.set(room.id, result.state)
        private = {'choice': result.result['choice'], 'power_up': result.result['power_up']}
        if 'opponent_choice' in result.result:
            private['opponent_choice'] = result.result['opponent_choice']
        self.transport.send(sid, 'rps_choice_submitted', private)
        if result.result['both_submitted']:
            self._rps_round_complete(room, result)

    def _rps_round_complete(self, room, result):
        state = result.state
        self.scheduler.cancel((room.id, TIMEOUT))
        self.transport.broadcast(room.id, 'rps_round_complete', self._game_payload(
            room, state, round_result=result.result['round_result'],
        ))
        if result.terminal:
            self._finish(room)
            stats = rock_paper_scissors.compute_stats(state)
            self.transport.broadcast(room.id, 'rps_match_over', self._game_payload(
                room, state, match_winner=stats['match_winner'], stats=stats,
            ))
            return
        self.scheduler.schedule((room.id, ADVANCE), self.config.get('RPS_ADVANCE_SEC', 3),
                                lambda: self._rps_next_round(room.id))

    def _rps_next_round(self, room_id):
        room = self.rooms.get_room(room_id)
        state = self.states.get(room_id)
        if room is None or state is None or state.GAME_ID != rock_paper_scissors.GAME_ID:
            return
        if state.status != 'round_over':
            return
        state = rock_paper_scissors.next_round(state, now=self.clock()).state
        self.states.set(room_id, state)
        self.transport.broadcast(room_id, 'game_started', self._game_payload(room, state))
        self._arm_timeout(room_id, state)

    # ---- hangman ----

    def on_hangman_set_word(self, sid, data, account):
        room, state = self._load(data.get('room_id'), hangman)
        player = self._require_actor(sid, room, data.get('player_id'))
        result = hangman.set_word(state, player.id, data.get('word'), now=self.clock())
        self.states.set(room.id, result.state)
        self.transport.broadcast(room.id, 'hangman_word_set', self._game_payload(room, result.state, **result.result))
        self._arm_timeout(room.id, result.state)

    def on_hangman_guess_letter(self, sid, data, account):
        room, state = self._load(data.get('room_id'), hangman)
        player = self._require_actor(sid, room, data.get('player_id'))
        result = hangman.guess_letter(state, player.id, data.get('letter'), data.get('power_up_type'),
                                      rng=self.rng, now=self.clock())
        self.states.set(room.id, result.state)
        self.transport.broadcast(room.id, 'hangman_letter_guessed',
                                 self._game_payload(room, result.state, **result.result))
        self._after_hangman(room, result)

    def _after_hangman(self, room, result):
        state = result.state
        if result.terminal:
            self._finish(room)
            self.transport.broadcast(room.id, 'hangman_game_over', self._game_payload(
                room, state, winner=state.winner, word=state.word, stats=hangman.compute_stats(state),
            ))
        else:
            self._arm_timeout(room.id, state)

    # ---- turn timers ----

    def _arm_timeout(self, room_id, state, delay=None):
        module = get_game(state.GAME_ID)
        if module not in TIMED_GAMES or not state.config.time_limit:
            return
        if state.status not in ('playing', 'waiting'):
            return
        if delay is None:
            delay = state.config.time_limit
        # Fire just after the limit so the elapsed-time check is strictly past it.
        self.scheduler.schedule((room_id, TIMEOUT), delay + 0.1,
                                lambda: self._on_timeout(room_id, module))

    def _on_timeout(self, room_id, module):
        room = self.rooms.get_room(room_id)
        state = self.states.get(room_id)
        if room is None or state is None or state.GAME_ID != module.GAME_ID:
            return
        if not module.has_time_limit_exceeded(state, now=self.clock()):
            # The turn clock restarted since this timer was armed.
            self._arm_timeout(room_id, state, max(module.seconds_left(state, now=self.clock()), 0))
            return
        result = module.handle_time_expired(state, now=self.clock())
        self.states.set(room_id, result.state)
        self.transport.broadcast(room_id, 'time_expired', self._game_payload(room, result.state, **result.result))
        self.logger.info(f"[turn-expired] room={room_id} game={module.GAME_ID}")
        if module in SERIES_GAMES:
            self._series_game_over(room, result.state, module)
        elif module is rock_paper_scissors:
            self._rps_round_complete(room, result)
        else:
            self._after_hangman(room, result)

    # ---- permanent rooms ----

    def on_create_permanent_room(self, sid, data, account):
        account = self._require_account(account)
        name = self._text(data, 'name', MAX_ROOM_NAME_LENGTH, required=False) or f"{account.username}'s Room"
        game_id = get_game(data.get('game_id')).GAME_ID
        capacity = None
        if data.get('max_players') is not None:
            capacity = coerce_int(data.get('max_players'), 'max_players')
            if not 2 <= capacity <= self.config.get('PERMANENT_ROOM_CAPACITY', 8):
                raise ValidationError('max_players is out of range')
        room, player = self.rooms.create_or_load_permanent_room(account.id, account.username, name, game_id, capacity)
        self._bind(sid, player.id)
        self.transport.join(sid, room.id)
        self.transport.send(sid, 'room_created', {'room': room.to_dict(), 'player_id': player.id})
        self.logger.info(f"[permanent-room] room={room.id} owner={account.id}")

    def on_get_my_room(self, sid, data, account):
        account = self._require_account(account)
        loaded = self.rooms.load_permanent_room(account.id, account.username)
        if loaded is None:
            self.transport.send(sid, 'my_room_data', {'room': None})
            return
        room, player = loaded
        self._bind(sid, player.id)
        self.transport.join(sid, room.id)
        self.transport.send(sid, 'my_room_data', {'room': room.to_dict(), 'player_id': player.id})

    def on_get_public_rooms(self, sid, data, account):
        self.transport.send(sid, 'public_rooms_list', {'rooms': self.public_rooms()})

    def public_rooms(self):
        listing = []
        for record in self.registry.get_public_rooms(self.rooms.get_active_account_ids()):
            live = self.rooms.get_room(record.id)
            entry = record.to_dict()
            entry['player_count'] = len(live.players) if live else 0
            entry['max_players'] = live.capacity if live else self.rooms.permanent_capacity
            listing.append(entry)
        return listing

    def on_update_room_name(self, sid, data, account):
        account = self._require_account(account)
        name = self._text(data, 'name', MAX_ROOM_NAME_LENGTH)
        room = self.rooms.update_room_name(data.get('room_id'), account.id, name)
        self.transport.broadcast(room.id, 'room_name_updated', {'room': room.to_dict()})

    def on_kick_player(self, sid, data, account):
        account = self._require_account(account)
        room_id = data.get('room_id')
        state = self.states.get(room_id)
        room, kicked = self.rooms.kick_player(room_id, account.id, data.get('player_id'))
        kicked_sid = self._unbind(kicked.id)
        if kicked_sid:
            self.transport.send(kicked_sid, 'player_kicked', {
                'room_id': room.id,
                'reason': 'You were kicked by the room owner',
            })
            self.transport.leave(kicked_sid, room.id)
        aborted = False
        if state is not None and room.status == 'playing' and kicked.id in state.player_ids:
            self._teardown_game(room.id)
            self.rooms.update_status(room.id, 'waiting')
            aborted = True
        self.transport.broadcast(room.id, 'player_left', {
            'player_id': kicked.id,
            'room': room.to_dict(),
            'game_aborted': aborted,
        })
        self.logger.info(f"[player-kicked] room={room.id} player={kicked.id}")
