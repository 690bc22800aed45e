from __future__ import annotations

from numba import njit
import numpy as np

from ..math.quaternion import quat_derivative, quat_normalize
from .base import IntegratorType, QuaternionStepIntegrator


@njit
def runge_kutta_step(q0: np.ndarray, w0: np.ndarray, w1: np.ndarray, dt: float) -> np.ndarray:
    """
    Integrate attitude using RK4.

    The angular velocity is assumed to vary linearly over the interval, so
    the stages at t0, t0 + dt/2 (twice) and t0 + dt use w0, (w0 + w1) / 2
    and w1 respectively.

    Inputs:
        q0: np.ndarray of shape (4,) - unit attitude quaternion
        w0: np.ndarray of shape (3,) - angular velocity at the start of the interval
        w1: np.ndarray of shape (3,) - angular velocity at the end of the interval
        dt: float - time step
    Output:
        q1: np.ndarray of shape (4,) - normalized attitude
    """
    w_mid = 0.5 * (w0 + w1)
    half_dt = 0.5 * dt

    # slope at the start of the interval
    k1 = quat_derivative(q0, w0)

    # two slopes at the midpoint, the second one refined from the first
    k2 = quat_derivative(q0 + half_dt * k1, w_mid)
    k3 = quat_derivative(q0 + half_dt * k2, w_mid)

    # slope at the end of the interval
    k4 = quat_derivative(q0 + dt * k3, w1)

    q1 = q0 + (dt / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)
    return quat_normalize(q1)


class RungeKuttaQuaternionStepIntegrator(QuaternionStepIntegrator):
    """Classical fourth order Runge-Kutta integrator.

    Most accurate of the multi-stage schemes (local error O(dt^5)) at the
    cost of four Omega products per step. This is the default integrator.
    """

    __slots__ = ()

    integrator_type = IntegratorType.RUNGE_KUTTA

    def _step(self, q0, w0, w1, dt):
        return runge_kutta_step(q0, w0, w1, dt)
