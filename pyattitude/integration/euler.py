from __future__ import annotations

from numba import njit
import numpy as np

from ..math.quaternion import quat_derivative, quat_normalize
from .base import IntegratorType, QuaternionStepIntegrator


@njit
def euler_step(q0: np.ndarray, w0: np.ndarray, dt: float) -> np.ndarray:
    """
    Forward Euler step: q1 = q0 + dt * k1, with the slope k1 taken at the
    start of the interval.
    Inputs:
        q0: np.ndarray of shape (4,) - unit attitude quaternion
        w0: np.ndarray of shape (3,) - angular velocity at the start of the interval
        dt: float - time step
    Output:
        q1: np.ndarray of shape (4,) - normalized attitude
    """
    k1 = quat_derivative(q0, w0)
    return quat_normalize(q0 + dt * k1)


class EulerQuaternionStepIntegrator(QuaternionStepIntegrator):
    """First order integrator. Ignores the angular velocity at the end of the
    interval, so it is only adequate for very high sample rates."""

    __slots__ = ()

    integrator_type = IntegratorType.EULER_METHOD

    def _step(self, q0, w0, w1, dt):
        return euler_step(q0, w0, dt)
