#!/usr/bin/env python3
"""
param_loader.py - Load CTD simulator parameters from configuration file
Reads an INI-style file with [sections] and 'Parameter Name = value' lines:

    [Simulators.CTD]
    Standard Deviation - Temperature = 1.0
    Mean Value - Temperature         = 14.0
    PRNG Type                        = mt19937
    PRNG Seed                        = 42
    Execution Frequency              = 2

Missing parameters keep the defaults from config/ctd_config.py.
"""

import os
import logging
from typing import Any, Dict, Tuple

from config.ctd_config import CTD_CONFIG
from ctd_simulator import CTDArguments

logger = logging.getLogger('CTD_Simulator')

# Parameter name -> (CTDArguments field or 'frequency', converter)
PARAMETERS = {
    'Standard Deviation - Temperature': ('std_dev_temp', float),
    'Mean Value - Temperature': ('mean_temp', float),
    'Standard Deviation - Conductivity': ('std_dev_cond', float),
    'Mean Value - Conductivity': ('mean_cond', float),
    'Standard Deviation - Depth': ('std_dev_depth', float),
    'PRNG Type': ('prng_type', str),
    'PRNG Seed': ('prng_seed', int),
    'Execution Frequency': ('frequency', float),
}


def default_parameters(config: Dict[str, Any] = None) -> Dict[str, Any]:
    """Flatten the CTD_CONFIG dictionary into CTDArguments fields plus frequency"""
    config = config or CTD_CONFIG
    return {
        'std_dev_temp': float(config['temperature']['std_dev']),
        'mean_temp': float(config['temperature']['mean']),
        'std_dev_cond': float(config['conductivity']['std_dev']),
        'mean_cond': float(config['conductivity']['mean']),
        'std_dev_depth': float(config['depth']['std_dev']),
        'prng_type': str(config['prng']['type']),
        'prng_seed': int(config['prng']['seed']),
        'frequency': float(config['frequency']),
    }


def load_ctd_config(config_file: str = "ctd_sim.ini",
                    section: str = CTD_CONFIG['task_name']) -> Tuple[CTDArguments, float]:
    """
    Load CTD simulator parameters from configuration file

    Returns:
        (CTDArguments, execution frequency in Hz)
    """
    params = default_parameters()

    if not config_file or not os.path.exists(config_file):
        logger.info("No parameter file %s, using CTD defaults", config_file)
        return _build(params)

    current_section = None
    with open(config_file, 'r') as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()

            # Skip comments and empty lines
            if not line or line.startswith(('#', ';')):
                continue

            if line.startswith('[') and line.endswith(']'):
                current_section = line[1:-1].strip()
                continue

            if current_section != section:
                continue

            if '=' not in line:
                logger.warning("%s:%d: expected 'name = value', got '%s'", config_file, line_num, line)
                continue

            key, value = (part.strip() for part in line.split('=', 1))
            if key not in PARAMETERS:
                logger.warning("%s:%d: unknown parameter '%s' in [%s]", config_file, line_num, key, section)
                continue

            field, convert = PARAMETERS[key]
            try:
                params[field] = convert(value)
            except ValueError as e:
                logger.warning("%s:%d: invalid value for '%s': %s (%s)", config_file, line_num, key, value, e)

    logger.info("CTD parameters loaded from %s", config_file)
    return _build(params)


def _build(params: Dict[str, Any]) -> Tuple[CTDArguments, float]:
    params = dict(params)
    frequency = params.pop('frequency')
    return CTDArguments(**params), frequency
