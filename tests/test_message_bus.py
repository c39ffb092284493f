#!/usr/bin/env python3
"""
tests/test_message_bus.py - Publish/subscribe delivery and history
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from message_bus import Message, MessageBus


def test_delivery_by_type():
    bus = MessageBus()
    temps, depths = [], []
    bus.subscribe('Temperature', temps.append)
    bus.subscribe('Depth', depths.append)

    bus.publish(Message('Temperature', {'value': 14.2}))
    bus.publish(Message('Salinity', {'value': 35.0}))

    assert [m.value for m in temps] == [14.2]
    assert depths == []


def test_unsubscribe():
    bus = MessageBus()
    received = []
    bus.subscribe('Depth', received.append)
    bus.unsubscribe('Depth', received.append)
    bus.publish(Message('Depth', {'value': 1.0}))
    assert received == []


def test_failing_subscriber_does_not_block_others():
    bus = MessageBus()
    received = []

    def broken(msg):
        raise RuntimeError("subscriber failure")

    bus.subscribe('Pressure', broken)
    bus.subscribe('Pressure', received.append)
    bus.publish(Message('Pressure', {'value': 2.0}))

    assert len(received) == 1


def test_history_drops_oldest_when_full():
    bus = MessageBus(history_size=3)
    for i in range(5):
        bus.publish(Message('Depth', {'value': float(i)}))

    pending = bus.get_all_pending_messages()
    assert [m.value for m in pending] == [2.0, 3.0, 4.0]
    assert bus.get_message(timeout=0.01) is None


def test_history_disabled_by_default():
    bus = MessageBus()
    bus.publish(Message('Depth', {'value': 1.0}))
    assert bus.get_message(timeout=0.01) is None
    assert bus.get_all_pending_messages() == []


def test_message_timestamp():
    assert Message('Depth', {'value': 1.0}, timestamp=5.0).timestamp == 5.0
    assert Message('Depth').timestamp > 0.0
