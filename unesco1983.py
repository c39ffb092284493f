#!/usr/bin/env python3
"""
unesco1983.py - Seawater properties from UNESCO Technical Paper 44 (1983)
Fofonoff & Millard, "Algorithms for computation of fundamental properties
of seawater".

- compute_salinity: Practical Salinity Scale 1978 (PSS-78)
- compute_sound_speed: Chen & Millero (1977) sound speed

Units used throughout this module:
- conductivity: S/m
- pressure: bar (absolute gauge pressure as produced by the CTD model)
- temperature: °C
- salinity: PSU
- sound speed: m/s
"""

import math

# Conductivity of standard seawater C(35, 15, 0) in S/m (42.914 mS/cm)
C3515 = 4.2914

DBAR_PER_BAR = 10.0

# PSS-78 rt(T) coefficients
_C = (0.6766097, 2.00564e-2, 1.104259e-4, -6.9698e-7, 1.0031e-9)
# PSS-78 Rp pressure correction coefficients
_D = (3.426e-2, 4.464e-4, 4.215e-1, -3.107e-3)
_E = (2.070e-5, -6.370e-10, 3.989e-15)
# PSS-78 salinity polynomial
_A = (0.0080, -0.1692, 25.3851, 14.0941, -7.0261, 2.7081)
_B = (0.0005, -0.0056, -0.0066, -0.0375, 0.0636, -0.0144)
_K = 0.0162


def _half_power_series(coeffs, r: float) -> float:
    """Evaluate sum(coeffs[i] * r ** (i / 2))"""
    root = math.sqrt(r)
    total = 0.0
    for c in reversed(coeffs):
        total = total * root + c
    return total


def compute_salinity(conductivity: float, pressure: float, temperature: float) -> float:
    """Practical salinity from conductivity (S/m), pressure (bar) and temperature (°C).

    Valid for 2 <= S <= 42 and -2 <= T <= 35 °C. Outside that range the
    polynomial is still evaluated; values below zero can occur for very low
    conductivity. A negative conductivity ratio has no real square root and
    yields NaN.
    """
    r = conductivity / C3515
    if r < 0.0:
        return math.nan

    t = temperature
    p = pressure * DBAR_PER_BAR

    rt = _C[0] + t * (_C[1] + t * (_C[2] + t * (_C[3] + t * _C[4])))
    rp = 1.0 + (p * (_E[0] + _E[1] * p + _E[2] * p * p)) / (
        1.0 + _D[0] * t + _D[1] * t * t + (_D[2] + _D[3] * t) * r)
    rt_ratio = r / (rp * rt)
    if rt_ratio < 0.0:
        return math.nan

    dt = t - 15.0
    ds = (dt / (1.0 + _K * dt)) * _half_power_series(_B, rt_ratio)
    return _half_power_series(_A, rt_ratio) + ds


def compute_sound_speed(salinity: float, pressure: float, temperature: float) -> float:
    """Sound speed in seawater (m/s) from salinity (PSU), pressure (bar) and temperature (°C).

    Valid for 0 <= S <= 40, 0 <= T <= 40 °C and 0 <= P <= 1000 bar.
    """
    s = salinity
    t = temperature
    p = pressure
    sr = math.sqrt(abs(s))

    # S**2 term
    d = 1.727e-3 - 7.9836e-6 * p

    # S**3/2 term
    b1 = 7.3637e-5 + 1.7945e-7 * t
    b0 = -1.922e-2 - 4.42e-5 * t
    b = b0 + b1 * p

    # S**1 term
    a3 = (-3.389e-13 * t + 6.649e-12) * t + 1.100e-10
    a2 = ((7.988e-12 * t - 1.6002e-10) * t + 9.1041e-9) * t - 3.9064e-7
    a1 = (((-2.0122e-10 * t + 1.0507e-8) * t - 6.4885e-8) * t - 1.2580e-5) * t + 9.4742e-5
    a0 = (((-3.21e-8 * t + 2.006e-6) * t + 7.164e-5) * t - 1.262e-2) * t + 1.389
    a = ((a3 * p + a2) * p + a1) * p + a0

    # S**0 term
    c3 = (-2.3643e-12 * t + 3.8504e-10) * t - 9.7729e-9
    c2 = (((1.0405e-12 * t - 2.5335e-10) * t + 2.5974e-8) * t - 1.7107e-6) * t + 3.1260e-5
    c1 = (((-6.1185e-10 * t + 1.3621e-7) * t - 8.1788e-6) * t + 6.8982e-4) * t + 0.153563
    c0 = ((((3.1464e-9 * t - 1.47800e-6) * t + 3.3420e-4) * t - 5.80852e-2) * t + 5.03711) * t + 1402.388
    c = ((c3 * p + c2) * p + c1) * p + c0

    return c + (a + b * sr + d * s) * s
