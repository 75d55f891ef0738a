import dataclasses
from typing import Any, Dict, Optional


class GameStateStore:
    """In-memory map of room id to that room's current game state."""

    def __init__(self):
        self._states: Dict[str, Any] = {}

    def set(self, room_id: str, state: Any) -> None:
        self._states[room_id] = state

    def get(self, room_id: str) -> Optional[Any]:
        return self._states.get(room_id)

    def update(self, room_id: str, **patch) -> Optional[Any]:
        """Patch the currently stored state, not a caller-held copy."""
        current = self._states.get(room_id)
        if current is None:
            return None
        updated = dataclasses.replace(current, **patch)
        self._states[room_id] = updated
        return updated

    def delete(self, room_id: str) -> None:
        self._states.pop(room_id, None)

    def has(self, room_id: str) -> bool:
        return room_id in self._states

    def __len__(self):
        return len(self._states)
