#!/usr/bin/env python3
"""
vehicle_state.py - Simulated vehicle state snapshot
Carries the vehicle pose and body velocities published by the vehicle
simulator. Consumers keep the most recent snapshot only.
- z is the vertical position in the world frame (meters, positive down)
"""

from typing import Dict, Any

SIMULATED_STATE = 'SimulatedState'


class SimulatedState:
    """Vehicle state as published by the vehicle simulator"""

    FIELDS = ('lat', 'lon', 'height', 'x', 'y', 'z',
              'phi', 'theta', 'psi', 'u', 'v', 'w')

    def __init__(self, **kwargs):
        for name in self.FIELDS:
            setattr(self, name, float(kwargs.pop(name, 0.0)))
        if kwargs:
            raise TypeError(f"Unknown SimulatedState fields: {sorted(kwargs)}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SimulatedState':
        """Build a snapshot from a bus payload, ignoring unknown keys"""
        return cls(**{k: v for k, v in data.items() if k in cls.FIELDS})

    def to_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in self.FIELDS}

    def copy(self) -> 'SimulatedState':
        return SimulatedState(**self.to_dict())

    def __eq__(self, other):
        if not isinstance(other, SimulatedState):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return f"SimulatedState(z={self.z:.2f}, lat={self.lat:.6f}, lon={self.lon:.6f})"
