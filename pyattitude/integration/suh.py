from __future__ import annotations

from numba import njit
import numpy as np

from ..math.quaternion import omega_matrix, quat_normalize
from .base import IntegratorType, QuaternionStepIntegrator


@njit
def suh_step(q0: np.ndarray, w0: np.ndarray, w1: np.ndarray, dt: float) -> np.ndarray:
    """
    Suh's closed-form polynomial update.

    The exponential of the average rate w_avg = (w0 + w1) / 2 is replaced by
    its truncated series, and the w0 x w1 commutator accounts for the change
    of the angular velocity within the interval:

        q1 = [(1 - |w_avg|^2 dt^2 / 8) I + (dt / 2 - |w_avg|^2 dt^3 / 48) Omega(w_avg)
              + dt^2 / 48 (Omega1 Omega0 - Omega0 Omega1)] q0

    Source: Suh, "Orientation estimation using a quaternion-based indirect
    Kalman filter with adaptive estimation of external acceleration",
    IEEE Trans. Instrum. Meas. 59(12), 2010.
    """
    w_avg = 0.5 * (w0 + w1)

    omega_avg = omega_matrix(w_avg)
    omega0 = omega_matrix(w0)
    omega1 = omega_matrix(w1)

    sqr_norm = w_avg[0] * w_avg[0] + w_avg[1] * w_avg[1] + w_avg[2] * w_avg[2]
    dt2 = dt * dt
    dt3 = dt2 * dt

    a = ((1.0 - sqr_norm * dt2 / 8.0) * np.eye(4)
         + (0.5 * dt - sqr_norm * dt3 / 48.0) * omega_avg
         + (dt2 / 48.0) * (omega1 @ omega0 - omega0 @ omega1))

    return quat_normalize(a @ q0)


class SuhQuaternionStepIntegrator(QuaternionStepIntegrator):
    """Closed-form polynomial integrator, no trigonometric evaluation."""

    __slots__ = ()

    integrator_type = IntegratorType.SUH

    def _step(self, q0, w0, w1, dt):
        return suh_step(q0, w0, w1, dt)
