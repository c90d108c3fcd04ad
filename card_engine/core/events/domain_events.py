"""
Game lifecycle events.

Event records are created by the lifecycle's ``emit`` and delivered
synchronously to subscribers of the matching type.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict


class GameEventType(Enum):
    """Lifecycle event kinds"""
    GAME_STARTED = "game_started"
    GAME_ENDED = "game_ended"
    GAME_PAUSED = "game_paused"
    GAME_RESUMED = "game_resumed"
    TURN_CHANGED = "turn_changed"
    PLAYER_JOINED = "player_joined"
    PLAYER_LEFT = "player_left"
    STATE_CHANGED = "state_changed"


@dataclass
class GameEvent:
    """A single emitted event.

    Attributes:
        event_type: What happened.
        data: Event payload; keys depend on the event type.
        timestamp: When the event was created.
    """
    event_type: GameEventType
    data: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"[{self.timestamp:%H:%M:%S}] {self.event_type.value}: {self.data}"
