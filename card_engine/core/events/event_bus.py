"""
Event Bus - 事件总线

同步、有序的进程内发布/订阅通道. 同一事件类型的监听器按注册顺序调用.
"""

from collections import defaultdict
import logging
from typing import Callable, Dict, List, Optional

from .domain_events import GameEvent, GameEventType

EventListener = Callable[[GameEvent], None]


class EventBus:
    """
    事件总线

    负责监听器的注册与事件分发，并保留有限长度的事件历史.
    """

    def __init__(self, max_history_size: int = 1000):
        """
        初始化事件总线

        Args:
            max_history_size: 事件历史的最大条数
        """
        self._listeners: Dict[GameEventType, List[EventListener]] = defaultdict(list)
        self._event_history: List[GameEvent] = []
        self._max_history_size = max_history_size
        self._logger = logging.getLogger(__name__)

    def subscribe(self, event_type: GameEventType, listener: EventListener) -> None:
        """
        订阅特定类型的事件

        Args:
            event_type: 事件类型
            listener: 回调函数，接收GameEvent
        """
        self._listeners[event_type].append(listener)
        self._logger.debug(f"Listener subscribed to {event_type.name}")

    def unsubscribe(self, event_type: GameEventType, listener: EventListener) -> bool:
        """
        取消订阅

        Returns:
            bool: 监听器是否存在并被移除
        """
        if listener in self._listeners[event_type]:
            self._listeners[event_type].remove(listener)
            self._logger.debug(f"Listener unsubscribed from {event_type.name}")
            return True
        return False

    def publish(self, event: GameEvent) -> None:
        """
        发布事件

        监听器列表先复制一份再遍历，分发过程中的注册变化不会影响本次分发.
        单个监听器抛出的异常会被记录，不会中断其余监听器和调用方的操作.

        Args:
            event: 要发布的事件
        """
        self._add_to_history(event)
        listeners = self._listeners[event.event_type][:]

        self._logger.debug(f"Publishing event {event.event_type.name} to {len(listeners)} listener(s)")

        for listener in listeners:
            try:
                listener(event)
            except Exception:
                self._logger.exception(f"Error in listener for {event.event_type.name}")

    def emit(self, event_type: GameEventType, data: Optional[dict] = None) -> GameEvent:
        """
        创建并发布事件

        Args:
            event_type: 事件类型
            data: 事件数据

        Returns:
            GameEvent: 已发布的事件
        """
        event = GameEvent(event_type=event_type, data=dict(data or {}))
        self.publish(event)
        return event

    def _add_to_history(self, event: GameEvent) -> None:
        self._event_history.append(event)
        if len(self._event_history) > self._max_history_size:
            self._event_history.pop(0)

    def get_history(self,
                    event_type: Optional[GameEventType] = None,
                    limit: Optional[int] = None) -> List[GameEvent]:
        """
        获取事件历史

        Args:
            event_type: 过滤的事件类型
            limit: 返回最近的最多limit条

        Returns:
            List[GameEvent]: 事件列表(按发生顺序)
        """
        events = self._event_history[:]
        if event_type:
            events = [e for e in events if e.event_type == event_type]
        if limit:
            events = events[-limit:]
        return events

    def clear_history(self) -> None:
        """清空事件历史"""
        self._event_history.clear()

    def listener_count(self, event_type: GameEventType) -> int:
        """获取某类型事件的监听器数量"""
        return len(self._listeners[event_type])
