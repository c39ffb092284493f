#!/usr/bin/env python3
"""
tests/test_basic.py - Basic system tests
"""

import pytest
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

def test_imports():
    """Test that core modules can be imported"""
    try:
        from ctd_simulator import CTDSimulator
        from message_bus import MessageBus
        from periodic_task import PeriodicTask
        from config.ctd_config import CTD_CONFIG
        assert True
    except ImportError:
        assert False, "Core modules failed to import"

def test_simulated_state():
    """Test SimulatedState round trip through a bus payload"""
    from vehicle_state import SimulatedState

    state = SimulatedState(z=12.5, lat=0.6, psi=1.5)
    copy = SimulatedState.from_dict(dict(state.to_dict(), extra='ignored'))
    assert copy == state
    assert copy is not state

    with pytest.raises(TypeError):
        SimulatedState(depth=3.0)

def test_depth_profile():
    """Test CLI dive profile"""
    from ctd_main import DepthProfile

    profile = DepthProfile(start_depth=1.0, dive_rate=0.5, max_depth=5.0)
    assert profile.depth_at(0.0) == 1.0
    assert profile.depth_at(4.0) == 3.0
    assert profile.depth_at(100.0) == 5.0

    climb = DepthProfile(start_depth=2.0, dive_rate=-1.0, max_depth=5.0)
    assert climb.depth_at(10.0) == 0.0

def test_console_printer(capsys):
    """Test that one tick prints as a single console line"""
    from ctd_main import ConsolePrinter
    from ctd_simulator import CTDArguments, CTDSimulator
    from message_bus import Message, MessageBus
    from vehicle_state import SIMULATED_STATE, SimulatedState

    bus = MessageBus()
    ConsolePrinter(bus)
    sim = CTDSimulator(bus, CTDArguments(prng_seed=1))
    sim.acquire()
    bus.publish(Message(SIMULATED_STATE, SimulatedState(z=5.0).to_dict()))
    sim.step(now=10.0)

    lines = capsys.readouterr().out.strip().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("[10.000]")
    assert "SoundSpeed=" in lines[0]

if __name__ == "__main__":
    pytest.main([__file__])
