from __future__ import annotations

from numba import njit
import numpy as np

from ..math.quaternion import half_angle_sinc, omega_matrix, quat_normalize
from .base import IntegratorType, QuaternionStepIntegrator


@njit
def yuan_step(q0: np.ndarray, w0: np.ndarray, w1: np.ndarray, dt: float) -> np.ndarray:
    """
    Exact exponential of the average angular velocity over the interval:

        q1 = [cos(theta/2) I + 0.5 * sinc(theta/2) * Omega(w_avg) dt] q0

    with w_avg = (w0 + w1) / 2 and theta = |w_avg| dt. Exact for a constant
    angular velocity; no correction for a changing rotation axis.
    """
    w_avg = 0.5 * (w0 + w1)
    w_avg_dt = w_avg * dt

    theta = np.sqrt(w_avg_dt[0] * w_avg_dt[0]
                    + w_avg_dt[1] * w_avg_dt[1]
                    + w_avg_dt[2] * w_avg_dt[2])
    half_theta = 0.5 * theta

    # sin(x) / x -> 1 for x -> 0
    sinc = half_angle_sinc(half_theta)

    a = np.cos(half_theta) * np.eye(4) + (0.5 * sinc * dt) * omega_matrix(w_avg)

    return quat_normalize(a @ q0)


class YuanQuaternionStepIntegrator(QuaternionStepIntegrator):
    __slots__ = ()

    integrator_type = IntegratorType.YUAN

    def _step(self, q0, w0, w1, dt):
        return yuan_step(q0, w0, w1, dt)
