from __future__ import annotations

import logging
from typing import Optional, Union

import numpy as np

from .integration import IntegratorType, create
from .integration.base import as_quaternion
from .math.quaternion import quat_normalize

logger = logging.getLogger(__name__)

IDENTITY = np.array([1.0, 0.0, 0.0, 0.0])


def integrate_gyro_sequence(timestamps, angular_rates, initial_attitude=None,
                            integrator_type: Optional[Union[IntegratorType, str]] = None,
                            return_history: bool = False) -> np.ndarray:
    """
    Integrate a timed sequence of gyroscope samples into an attitude.

    Samples are sorted by timestamp. Every pair of consecutive samples feeds
    one integration step whose result is the starting attitude of the next.

    Inputs:
        timestamps: array-like of shape (N,) - sample times [s]
        angular_rates: array-like of shape (N, 3) - body angular velocity [rad/s]
        initial_attitude: (4,) scalar-first quaternion, identity if None
        integrator_type: step integrator to use, Runge-Kutta if None
        return_history: when True return the attitude after every sample
    Output:
        (4,) final attitude, or (N, 4) attitude history when return_history is set

    Raises:
        ValueError: on mismatched or malformed inputs, or repeated timestamps
    """
    t = np.asarray(timestamps, dtype=float).reshape(-1)
    w = np.asarray(angular_rates, dtype=float)
    if w.ndim != 2 or w.shape[1] != 3:
        if w.size == 0:
            w = w.reshape(0, 3)
        else:
            raise ValueError(f"Angular rates must have shape (N, 3), got {w.shape}")
    if t.shape[0] != w.shape[0]:
        raise ValueError(
            f"Got {t.shape[0]} timestamps for {w.shape[0]} angular rate samples")

    if initial_attitude is None:
        q = IDENTITY.copy()
    else:
        q = as_quaternion(initial_attitude, "initial attitude")
        if not np.linalg.norm(q) > 0.0:
            raise ValueError("Initial attitude must be a non-zero quaternion")
        q = quat_normalize(q)

    integrator = create(integrator_type)

    order = np.argsort(t, kind="stable")
    t = t[order]
    w = w[order]

    history = np.empty((t.shape[0], 4))
    if t.shape[0] > 0:
        history[0] = q

    for k in range(1, t.shape[0]):
        dt = t[k] - t[k - 1]
        if dt <= 0.0:
            raise ValueError(f"Repeated timestamp {t[k]} at sample {k}")
        q = integrator.integrate(q, w[k - 1], w[k], dt)
        history[k] = q

    logger.debug("Integrated %d gyro samples with %s", t.shape[0],
                 integrator.get_type().name)

    if return_history:
        return history
    return q
