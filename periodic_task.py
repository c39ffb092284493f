#!/usr/bin/env python3
"""
periodic_task.py - Periodic task base class for simulator components

Lifecycle:
    start() -> acquire() -> initialize() -> worker thread calls step() at frequency
    stop()  -> join worker thread -> release()

Messages bound with bind() are queued from any publisher thread and consumed
on the worker thread right before each tick, so message handlers and task()
never run concurrently for the same instance.
"""

import time
import queue
import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Dict, Optional

from message_bus import Message, MessageBus

logger = logging.getLogger('PeriodicTask')

ENTITY_STATE = 'EntityState'


class EntityState(Enum):
    BOOT = "BOOT"
    NORMAL = "NORMAL"
    FAULT = "FAULT"
    ERROR = "ERROR"
    FAILURE = "FAILURE"


class ResourceAcquisitionError(RuntimeError):
    """Raised when a task cannot acquire the resources it needs to run"""


class PeriodicTask(ABC):
    """Base class for tasks executed at a fixed frequency"""

    def __init__(self, name: str, bus: MessageBus, frequency: float = 1.0,
                 clock: Callable[[], float] = time.time):
        if frequency <= 0.0:
            raise ValueError(f"Task frequency must be positive, got {frequency}")

        self.name = name
        self.bus = bus
        self.frequency = float(frequency)
        self.period = 1.0 / self.frequency
        self.clock = clock

        self.entity_state = EntityState.BOOT
        self.entity_description = "boot"
        self.resources_acquired = False

        self._handlers: Dict[str, Callable[[Message], None]] = {}
        self._inbox = queue.Queue()

        # Threading control
        self.running = False
        self.thread = None
        self._stop_event = threading.Event()

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------
    def on_resource_acquisition(self):
        pass

    def on_resource_initialization(self):
        pass

    def on_resource_release(self):
        pass

    @abstractmethod
    def task(self):
        """Periodic work, called once per period on the worker thread"""

    # -------------------------------------------------------------------------
    # Messaging
    # -------------------------------------------------------------------------
    def bind(self, msg_type: str, handler: Callable[[Message], None]):
        """Route bus messages of msg_type to handler on the worker thread"""
        if msg_type not in self._handlers:
            self.bus.subscribe(msg_type, self._enqueue)
        self._handlers[msg_type] = handler

    def _enqueue(self, message: Message):
        self._inbox.put(message)

    def consume_messages(self) -> int:
        """Deliver all queued messages to their handlers, returns count"""
        count = 0
        while True:
            try:
                message = self._inbox.get_nowait()
            except queue.Empty:
                break
            handler = self._handlers.get(message.msg_type)
            if handler is not None:
                handler(message)
                count += 1
        return count

    def dispatch(self, message: Message, keep_time: bool = False):
        """Publish message on the bus, stamping it with the clock unless keep_time"""
        if not keep_time:
            message.timestamp = self.clock()
        message.source = self.name
        self.bus.publish(message)

    def set_entity_state(self, state: EntityState, description: str):
        self.entity_state = state
        self.entity_description = description
        self.dispatch(Message(ENTITY_STATE, {
            'state': state.value,
            'description': description,
        }))

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    def acquire(self):
        """Acquire resources, wrapping any failure in ResourceAcquisitionError"""
        if self.resources_acquired:
            return
        try:
            self.on_resource_acquisition()
        except Exception as e:
            self.entity_state = EntityState.FAILURE
            self.entity_description = str(e)
            logger.error("%s: resource acquisition failed: %s", self.name, e)
            raise ResourceAcquisitionError(f"{self.name}: {e}") from e
        self.resources_acquired = True

    def initialize(self):
        self.on_resource_initialization()

    def release(self):
        if not self.resources_acquired:
            return
        self.on_resource_release()
        self.resources_acquired = False

    def step(self, now: Optional[float] = None):
        """Consume pending messages, then run one tick.

        Args:
            now: Optional fixed time for this tick (replaces the clock)
        """
        if now is not None:
            saved_clock = self.clock
            self.clock = lambda: now
            try:
                self.consume_messages()
                self.task()
            finally:
                self.clock = saved_clock
        else:
            self.consume_messages()
            self.task()

    def start(self):
        """Acquire resources and start the worker thread"""
        if self.running:
            return

        self.acquire()
        self.initialize()

        self.running = True
        self._stop_event.clear()
        self.thread = threading.Thread(target=self._run_loop, name=self.name, daemon=True)
        self.thread.start()
        logger.info("%s started at %.2f Hz", self.name, self.frequency)

    def stop(self):
        """Stop the worker thread and release resources"""
        self.running = False
        self._stop_event.set()
        if self.thread and self.thread.is_alive():
            self.thread.join(timeout=max(1.0, 2.0 * self.period))
        self.thread = None
        self.release()
        logger.info("%s stopped", self.name)

    def _run_loop(self):
        next_tick = time.monotonic()
        while self.running:
            try:
                self.step()
            except Exception:
                logger.exception("%s: task error", self.name)

            next_tick += self.period
            delay = next_tick - time.monotonic()
            if delay < 0.0:
                # Overran one or more periods, resynchronize
                next_tick = time.monotonic()
                delay = 0.0
            if self._stop_event.wait(delay):
                break
