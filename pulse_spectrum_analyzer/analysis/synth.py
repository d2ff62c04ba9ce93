"""Pulse-train synthesis.

The waveform is

    x[n] = A * [tau_n < d*T] + D + eta * (u_n - 1/2),    u_n ~ U[0, 1)

with ``t_n = n*Ts``, ``T = 1/f`` and ``tau_n = t_n mod T``.

Edge handling
-------------
Sample instants often land exactly on a pulse edge (e.g. 50 Hz, 30 % duty,
Ts = 0.1 ms puts sample 60 on the falling edge).  A bare ``fmod`` of the
rounded ``n*Ts`` then decides High or Low from the last bit of the product.
The phase is therefore evaluated in cycles with an absolute tolerance of
``EDGE_TOL_CYCLES``: a sample on the rising edge is High, a sample on the
falling edge is Low.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from pulse_spectrum_analyzer.models.profile import SignalProfile
from pulse_spectrum_analyzer.models.results import frozen_array


EDGE_TOL_CYCLES = 1e-9


def make_rng(seed: int) -> np.random.Generator:
    """Seeded generator used when the caller does not supply one."""
    return np.random.default_rng(int(seed))


def sample_times(n_samples: int, sample_interval_s: float) -> np.ndarray:
    """Sample instants ``t = n*Ts`` for ``n = 0..N-1``."""
    return sample_interval_s * np.arange(int(n_samples), dtype=np.float64)


def pulse_levels(
    t: np.ndarray,
    *,
    frequency_hz: float,
    duty_cycle: float,
    amplitude: float,
) -> np.ndarray:
    """Noise-free pulse (no offset): ``amplitude`` while High, 0 while Low."""
    cycles = np.asarray(t, dtype=np.float64) * float(frequency_hz)
    phase = cycles - np.floor(cycles + EDGE_TOL_CYCLES)  # in [-tol, 1 - tol)
    high = phase < float(duty_cycle) - EDGE_TOL_CYCLES
    return np.where(high, float(amplitude), 0.0)


def synthesize_pulse(
    profile: SignalProfile,
    *,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """Generate the noisy, biased pulse train described by ``profile``.

    Parameters
    ----------
    profile:
        Validated configuration.
    rng:
        Random generator for the noise.  Defaults to ``make_rng(profile.seed)``;
        pass a generator explicitly to share or mock the noise source.

    Returns
    -------
    np.ndarray
        Read-only float64 array of shape ``(n_samples,)``.
    """
    if rng is None:
        rng = make_rng(profile.seed)

    t = sample_times(profile.n_samples, profile.sample_interval_s)
    x = pulse_levels(
        t,
        frequency_hz=profile.frequency_hz,
        duty_cycle=profile.duty_cycle,
        amplitude=profile.amplitude,
    )
    x = x + profile.dc_offset

    # Draw even when eta == 0 so the generator state does not depend on it.
    u = rng.random(profile.n_samples)
    x = x + profile.noise_level * (u - 0.5)

    return frozen_array(x)
