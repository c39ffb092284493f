#!/usr/bin/env python3
"""
message_bus.py - In-process publish/subscribe message bus
Tasks exchange typed messages (SimulatedState, Temperature, Depth, ...)
through a shared bus. Delivery is synchronous in the publisher's thread;
subscribers that need their own thread queue the message themselves.
An optional bounded history lets tools poll recent traffic.
"""

import time
import queue
import logging
import threading
from typing import Any, Callable, Dict, List, Optional

logger = logging.getLogger('MessageBus')


class Message:
    """Typed message container"""

    def __init__(self, msg_type: str, payload: Optional[Dict[str, Any]] = None,
                 timestamp: Optional[float] = None, source: Optional[str] = None):
        self.msg_type = msg_type
        self.payload = dict(payload or {})
        self.timestamp = time.time() if timestamp is None else timestamp
        self.source = source

    @property
    def value(self) -> Any:
        """Shortcut for scalar messages carrying a single 'value' field"""
        return self.payload.get('value')

    def __repr__(self):
        return f"Message({self.msg_type}, {self.payload}, t={self.timestamp:.3f})"


class MessageBus:
    def __init__(self, history_size: int = 0):
        """
        Initialize message bus

        Args:
            history_size: Number of recent messages kept for polling (0 disables)
        """
        self._lock = threading.RLock()
        self._subscribers: Dict[str, List[Callable[[Message], None]]] = {}
        self.history = queue.Queue(maxsize=history_size) if history_size > 0 else None

    def subscribe(self, msg_type: str, callback: Callable[[Message], None]):
        with self._lock:
            self._subscribers.setdefault(msg_type, []).append(callback)

    def unsubscribe(self, msg_type: str, callback: Callable[[Message], None]):
        with self._lock:
            callbacks = self._subscribers.get(msg_type, [])
            if callback in callbacks:
                callbacks.remove(callback)

    def publish(self, message: Message):
        """Deliver message to every subscriber of its type"""
        with self._lock:
            callbacks = list(self._subscribers.get(message.msg_type, []))

        if self.history is not None:
            self._record(message)

        for callback in callbacks:
            try:
                callback(message)
            except Exception:
                logger.exception("Subscriber %r failed on %s", callback, message.msg_type)

    def _record(self, message: Message):
        try:
            self.history.put_nowait(message)
        except queue.Full:
            # Drop oldest message to make room
            try:
                self.history.get_nowait()
                self.history.put_nowait(message)
            except (queue.Empty, queue.Full):
                pass

    def get_message(self, timeout: float = 0.1) -> Optional[Message]:
        """Get next message from history"""
        if self.history is None:
            return None
        try:
            return self.history.get(timeout=timeout)
        except queue.Empty:
            return None

    def get_all_pending_messages(self) -> List[Message]:
        """Get all pending messages from history"""
        messages = []
        if self.history is None:
            return messages
        while True:
            try:
                messages.append(self.history.get_nowait())
            except queue.Empty:
                break
        return messages
