from __future__ import annotations

from numba import njit
import numpy as np

from ..math.quaternion import omega_exponential, omega_matrix, quat_normalize
from .base import IntegratorType, QuaternionStepIntegrator


@njit
def trawny_step(q0: np.ndarray, w0: np.ndarray, w1: np.ndarray, dt: float) -> np.ndarray:
    """
    Closed-form update for an angular velocity varying linearly in time:

        q1 = [exp(0.5 * Omega(w_avg) dt) + dt^2 / 48 (Omega1 Omega0 - Omega0 Omega1)] q0

    The exponential of the average rate is evaluated exactly (sin/cos of
    half the rotation angle). The commutator term is proportional to
    w0 x w1 and vanishes when the rotation axis does not change.

    Source: Trawny & Roumeliotis, "Indirect Kalman Filter for 3D Attitude
    Estimation", MARS Lab TR 2005-002.
    """
    w_avg = 0.5 * (w0 + w1)

    omega0 = omega_matrix(w0)
    omega1 = omega_matrix(w1)
    commutator = omega1 @ omega0 - omega0 @ omega1

    a = omega_exponential(w_avg, dt) + (dt * dt / 48.0) * commutator

    return quat_normalize(a @ q0)


class TrawnyQuaternionStepIntegrator(QuaternionStepIntegrator):
    """Exponential of the average angular velocity plus a first order
    correction for the change of rotation axis within the interval."""

    __slots__ = ()

    integrator_type = IntegratorType.TRAWNY

    def _step(self, q0, w0, w1, dt):
        return trawny_step(q0, w0, w1, dt)
