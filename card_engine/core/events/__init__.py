"""
Events Module - 生命周期事件

Classes:
    GameEventType: 事件类型枚举
    GameEvent: 事件记录
    EventBus: 事件总线
"""

from .domain_events import GameEvent, GameEventType
from .event_bus import EventBus, EventListener

__all__ = [
    "GameEventType",
    "GameEvent",
    "EventBus",
    "EventListener",
]
