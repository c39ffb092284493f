#!/usr/bin/env python3
"""
ctd_main.py - Standalone CTD simulator runner
================================================================
Runs the CTD simulator against a simple vehicle depth profile and prints
every reading to the console.

USAGE:
    python ctd_main.py --duration 30 --dive-rate 0.5 --max-depth 20
    python ctd_main.py --config ctd_sim.ini --seed 42 --verbose
"""

import argparse
import logging
import signal
import sys
import time
from pathlib import Path

# ==================== PROJECT ROOT & PATHS ====================
PROJECT_ROOT = Path(__file__).parent.resolve()
sys.path.insert(0, str(PROJECT_ROOT))

from ctd_simulator import CTDSimulator, OUTPUT_TYPES, SOUND_SPEED
from message_bus import Message, MessageBus
from param_loader import load_ctd_config
from periodic_task import ResourceAcquisitionError
from vehicle_state import SIMULATED_STATE, SimulatedState

UNITS = {
    'Temperature': '°C',
    'Conductivity': 'S/m',
    'Depth': 'm',
    'Pressure': 'bar',
    'Salinity': 'PSU',
    'SoundSpeed': 'm/s',
}


class DepthProfile:
    """Vehicle vertical position: start depth, constant dive rate, capped at max depth"""

    def __init__(self, start_depth: float, dive_rate: float, max_depth: float):
        self.start_depth = start_depth
        self.dive_rate = dive_rate
        self.max_depth = max_depth

    def depth_at(self, elapsed: float) -> float:
        z = self.start_depth + self.dive_rate * elapsed
        if self.dive_rate >= 0.0:
            return min(z, self.max_depth)
        return max(z, 0.0)


class ConsolePrinter:
    """Collects the six CTD values of a tick and prints them as one line"""

    def __init__(self, bus: MessageBus):
        self.pending = {}
        for msg_type in OUTPUT_TYPES:
            bus.subscribe(msg_type, self.on_message)

    def on_message(self, msg: Message):
        self.pending[msg.msg_type] = msg.value
        if msg.msg_type == SOUND_SPEED:
            fields = "  ".join(f"{name}={self.pending.get(name, float('nan')):.3f}{UNITS[name]}"
                               for name in OUTPUT_TYPES)
            print(f"[{msg.timestamp:.3f}] {fields}")
            self.pending = {}


def main():
    parser = argparse.ArgumentParser(description='CTD Sensor Simulator')
    parser.add_argument('--config', type=str, default=str(PROJECT_ROOT / 'ctd_sim.ini'),
                        help='Parameter file (INI format)')
    parser.add_argument('--frequency', type=float, help='Execution frequency in Hz (overrides config)')
    parser.add_argument('--duration', type=float, default=10.0, help='Run time in seconds (default: 10)')
    parser.add_argument('--seed', type=int, help='PRNG seed, -1 for random (overrides config)')
    parser.add_argument('--prng', type=str, help='PRNG type (overrides config)')
    parser.add_argument('--depth', type=float, default=0.0, help='Initial vehicle depth in meters')
    parser.add_argument('--dive-rate', type=float, default=0.0, help='Vertical speed in m/s (positive down)')
    parser.add_argument('--max-depth', type=float, default=100.0, help='Depth where the dive levels off')
    parser.add_argument('--verbose', action='store_true', help='Verbose output')

    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s - %(name)s - %(levelname)s: %(message)s')

    ctd_args, frequency = load_ctd_config(args.config)
    if args.frequency is not None:
        frequency = args.frequency
    if args.seed is not None:
        ctd_args = ctd_args._replace(prng_seed=args.seed)
    if args.prng is not None:
        ctd_args = ctd_args._replace(prng_type=args.prng)

    print("CTD Simulator:")
    print(f"  Temperature: {ctd_args.mean_temp:.2f} ± {ctd_args.std_dev_temp:.2f} °C")
    print(f"  Conductivity: {ctd_args.mean_cond:.2f} ± {ctd_args.std_dev_cond:.2f} S/m")
    print(f"  Depth noise: ± {ctd_args.std_dev_depth:.2f} m")
    print(f"  PRNG: {ctd_args.prng_type} (seed {ctd_args.prng_seed})")
    print(f"  Rate: {frequency:.2f} Hz for {args.duration:.1f} s")

    bus = MessageBus()
    simulator = CTDSimulator(bus, ctd_args, frequency=frequency)
    ConsolePrinter(bus)
    profile = DepthProfile(args.depth, args.dive_rate, args.max_depth)

    try:
        simulator.start()
    except ResourceAcquisitionError as e:
        print(f"ERROR: {e}")
        return 1

    stop_requested = False

    def handle_signal(signum, frame):
        nonlocal stop_requested
        stop_requested = True

    signal.signal(signal.SIGINT, handle_signal)

    start_time = time.time()
    try:
        while not stop_requested:
            elapsed = time.time() - start_time
            if elapsed >= args.duration:
                break
            z = profile.depth_at(elapsed)
            bus.publish(Message(SIMULATED_STATE, SimulatedState(z=z).to_dict(), source='vehicle'))
            time.sleep(simulator.period)
    finally:
        simulator.stop()

    print("✓ CTD simulator stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
