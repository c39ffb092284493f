#!/usr/bin/env python3
"""
ctd_simulator.py - CTD (Conductivity, Temperature, Depth) sensor simulator

Temperature and conductivity are generated from a mean and standard
deviation. Depth follows the vertical position (z) of the last received
SimulatedState plus noise. Pressure, salinity and sound speed are derived
from those readings every tick.

The simulator stays silent until the first SimulatedState arrives; from
then on it publishes, per tick and with one shared timestamp:
    Temperature, Conductivity, Depth, Pressure, Salinity, SoundSpeed
"""

import logging
import threading
from enum import Enum
from typing import Dict, NamedTuple, Optional

from message_bus import Message, MessageBus
from noise_source import DEFAULT_PRNG_TYPE, RANDOM_SEED, NoiseSource, create_noise_source
from periodic_task import EntityState, PeriodicTask
from unesco1983 import compute_salinity, compute_sound_speed
from vehicle_state import SIMULATED_STATE, SimulatedState

logger = logging.getLogger('CTD_Simulator')

# Hydrostatic pressure constants
GRAVITY = 9.8                   # m/s²
SEAWATER_DENSITY = 1025.0       # kg/m³
SEA_LEVEL_PRESSURE = 101325.0   # Pa
PASCAL_PER_BAR = 100000.0

# Sound speed published when salinity is negative
INVALID_SOUND_SPEED = -1.0

# Published message types, in dispatch order
TEMPERATURE = 'Temperature'
CONDUCTIVITY = 'Conductivity'
DEPTH = 'Depth'
PRESSURE = 'Pressure'
SALINITY = 'Salinity'
SOUND_SPEED = 'SoundSpeed'
OUTPUT_TYPES = (TEMPERATURE, CONDUCTIVITY, DEPTH, PRESSURE, SALINITY, SOUND_SPEED)


class CTDArguments(NamedTuple):
    std_dev_temp: float = 1.0
    mean_temp: float = 14.0
    std_dev_cond: float = 1.0
    mean_cond: float = 4.0
    std_dev_depth: float = 0.1
    prng_type: str = DEFAULT_PRNG_TYPE
    prng_seed: int = RANDOM_SEED


class CTDReading(NamedTuple):
    """One coherent CTD observation"""
    timestamp: float
    temperature: float
    conductivity: float
    depth: float
    pressure: float
    salinity: float
    sound_speed: float

    def as_messages(self):
        values = (self.temperature, self.conductivity, self.depth,
                  self.pressure, self.salinity, self.sound_speed)
        return [Message(msg_type, {'value': value}, timestamp=self.timestamp)
                for msg_type, value in zip(OUTPUT_TYPES, values)]


class ActivationState(Enum):
    INACTIVE = "INACTIVE"
    ACTIVE = "ACTIVE"


class ActivationGate:
    """One-way INACTIVE -> ACTIVE state machine"""

    def __init__(self):
        self.state = ActivationState.INACTIVE

    @property
    def active(self) -> bool:
        return self.state is ActivationState.ACTIVE

    def activate(self) -> bool:
        """Move to ACTIVE, returns True only on the transition itself"""
        if self.state is ActivationState.ACTIVE:
            return False
        self.state = ActivationState.ACTIVE
        return True


def compute_pressure(depth: float) -> float:
    """Hydrostatic pressure in bar at depth (m), including the atmosphere"""
    return (depth * GRAVITY * SEAWATER_DENSITY + SEA_LEVEL_PRESSURE) / PASCAL_PER_BAR


def compute_sound_speed_or_invalid(salinity: float, pressure: float, temperature: float) -> float:
    if salinity < 0.0:
        return INVALID_SOUND_SPEED
    return compute_sound_speed(salinity, pressure, temperature)


class CTDSimulator(PeriodicTask):
    """CTD sensor simulator task"""

    def __init__(self, bus: MessageBus, args: Optional[CTDArguments] = None,
                 name: str = 'Simulators.CTD', frequency: float = 1.0, **kwargs):
        super().__init__(name, bus, frequency, **kwargs)
        self.args = args or CTDArguments()
        self.prng: Optional[NoiseSource] = None
        self.gate = ActivationGate()
        self.last_reading: Optional[CTDReading] = None
        self._sstate = SimulatedState()
        self._state_lock = threading.RLock()

        self.bind(SIMULATED_STATE, self._on_simulated_state)

    @property
    def active(self) -> bool:
        with self._state_lock:
            return self.gate.active

    @property
    def simulated_state(self) -> SimulatedState:
        with self._state_lock:
            return self._sstate.copy()

    def on_resource_acquisition(self):
        self.prng = create_noise_source(self.args.prng_type, self.args.prng_seed)
        logger.info("%s: noise source %r acquired", self.name, self.prng)

    def on_resource_release(self):
        self.prng = None

    def _on_simulated_state(self, message: Message):
        self.consume_simulated_state(SimulatedState.from_dict(message.payload))

    def consume_simulated_state(self, state: SimulatedState):
        """Store state and activate on the first update"""
        with self._state_lock:
            self._sstate = state.copy()
            activated = self.gate.activate()

        if activated:
            logger.info("%s: first simulated state received, activating", self.name)
            self.set_entity_state(EntityState.NORMAL, "active")

    def measure(self, timestamp: float) -> CTDReading:
        """Draw one observation: temperature, conductivity, depth, then derived values"""
        if self.prng is None:
            raise RuntimeError(f"{self.name}: noise source not acquired")

        with self._state_lock:
            z = self._sstate.z

        args = self.args
        temperature = args.mean_temp + self.prng.gaussian() * args.std_dev_temp
        conductivity = args.mean_cond + self.prng.gaussian() * args.std_dev_cond
        depth = max(z + self.prng.gaussian() * args.std_dev_depth, 0.0)

        pressure = compute_pressure(depth)
        salinity = compute_salinity(conductivity, pressure, temperature)
        sound_speed = compute_sound_speed_or_invalid(salinity, pressure, temperature)

        return CTDReading(timestamp, temperature, conductivity, depth,
                          pressure, salinity, sound_speed)

    def task(self):
        if not self.active:
            return

        reading = self.measure(self.clock())
        self.last_reading = reading

        logger.debug("%s: T=%.3f C=%.3f D=%.3f P=%.4f S=%.3f SS=%.2f", self.name,
                     reading.temperature, reading.conductivity, reading.depth,
                     reading.pressure, reading.salinity, reading.sound_speed)

        for message in reading.as_messages():
            self.dispatch(message, keep_time=True)

    def status(self) -> Dict[str, object]:
        with self._state_lock:
            return {
                'name': self.name,
                'activation': self.gate.state.value,
                'entity_state': self.entity_state.value,
                'z': self._sstate.z,
                'prng': repr(self.prng) if self.prng else None,
                'samples_drawn': self.prng.samples_drawn if self.prng else 0,
            }
