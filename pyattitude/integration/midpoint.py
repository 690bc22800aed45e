from __future__ import annotations

from numba import njit
import numpy as np

from ..math.quaternion import quat_derivative, quat_normalize
from .base import IntegratorType, QuaternionStepIntegrator


@njit
def midpoint_step(q0: np.ndarray, w0: np.ndarray, w1: np.ndarray, dt: float) -> np.ndarray:
    """
    Explicit midpoint step.

    The slope at the start of the interval moves the attitude to the middle
    of the interval, where the slope is evaluated again using the average
    angular velocity (w0 + w1) / 2. That second slope advances the full step.

    Inputs:
        q0: np.ndarray of shape (4,) - unit attitude quaternion
        w0: np.ndarray of shape (3,) - angular velocity at the start of the interval
        w1: np.ndarray of shape (3,) - angular velocity at the end of the interval
        dt: float - time step
    Output:
        q1: np.ndarray of shape (4,) - normalized attitude
    """
    w_mid = 0.5 * (w0 + w1)

    k1 = quat_derivative(q0, w0)
    k2 = quat_derivative(q0 + 0.5 * dt * k1, w_mid)

    return quat_normalize(q0 + dt * k2)


class MidPointQuaternionStepIntegrator(QuaternionStepIntegrator):
    """Second order integrator."""

    __slots__ = ()

    integrator_type = IntegratorType.MID_POINT

    def _step(self, q0, w0, w1, dt):
        return midpoint_step(q0, w0, w1, dt)
