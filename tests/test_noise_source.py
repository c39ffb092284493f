#!/usr/bin/env python3
"""
tests/test_noise_source.py - PRNG variants and factory
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from noise_source import (DEFAULT_PRNG_TYPE, NoiseSource, PRNGType, UnknownPRNGError,
                          create_noise_source)

ALL_TYPES = [t.value for t in PRNGType]


@pytest.mark.parametrize("prng_type", ALL_TYPES)
def test_fixed_seed_is_reproducible(prng_type):
    a = create_noise_source(prng_type, 1234)
    b = create_noise_source(prng_type, 1234)
    assert [a.gaussian() for _ in range(20)] == [b.gaussian() for _ in range(20)]


@pytest.mark.parametrize("prng_type", ALL_TYPES)
def test_samples_are_floats(prng_type):
    source = create_noise_source(prng_type, 5)
    sample = source.gaussian()
    assert type(sample) is float


def test_samples_look_standard_normal():
    source = create_noise_source(DEFAULT_PRNG_TYPE, 99)
    samples = [source.gaussian() for _ in range(20000)]
    mean = sum(samples) / len(samples)
    var = sum((s - mean) ** 2 for s in samples) / len(samples)
    assert abs(mean) < 0.05
    assert abs(var - 1.0) < 0.05


def test_instances_do_not_share_state():
    """Interleaved draws from two sources match draws taken separately"""
    reference = create_noise_source('pcg64', 7)
    expected = [reference.gaussian() for _ in range(5)]

    a = create_noise_source('pcg64', 7)
    b = create_noise_source('pcg64', 7)
    interleaved_a, interleaved_b = [], []
    for _ in range(5):
        interleaved_a.append(a.gaussian())
        interleaved_b.append(b.gaussian())

    assert interleaved_a == expected
    assert interleaved_b == expected


def test_negative_seed_is_non_deterministic():
    source = create_noise_source('mt19937', -1)
    assert source.seed is None
    assert not source.deterministic
    assert create_noise_source('mt19937', 0).deterministic


def test_type_names_are_case_insensitive():
    assert create_noise_source('PCG64', 1).prng_type is PRNGType.PCG64
    assert create_noise_source(' Python ', 1).prng_type is PRNGType.PYTHON


def test_unknown_type_raises():
    with pytest.raises(UnknownPRNGError) as excinfo:
        create_noise_source('c_fsr256', 1)
    assert 'c_fsr256' in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_samples_drawn_counter():
    source = NoiseSource(PRNGType.SFC64, 3)
    for _ in range(3):
        source.gaussian()
    assert source.samples_drawn == 3
