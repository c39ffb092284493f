#!/usr/bin/env python3
"""
config/ctd_config.py - CTD simulator configuration defaults
"""

CTD_CONFIG = {
    'task_name': 'Simulators.CTD',
    'frequency': 1.0,                   # Hz (host execution frequency)

    # Measurement noise
    'temperature': {
        'mean': 14.0,                   # °C
        'std_dev': 1.0,                 # °C (1-sigma)
    },
    'conductivity': {
        'mean': 4.0,                    # S/m
        'std_dev': 1.0,                 # S/m (1-sigma)
    },
    'depth': {
        'std_dev': 0.1,                 # meters (1-sigma), mean tracks vehicle z
    },

    # Pseudo-random number generator
    'prng': {
        'type': 'mt19937',
        'seed': -1,                     # -1 = non-deterministic seed
    },
}
