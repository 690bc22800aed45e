"""
Accuracy study of the step integrators against a high-accuracy reference.

The reference is the kinematic ODE dq/dt = 0.5 * Omega(w(t)) * q solved with
scipy's DOP853 at tight tolerances. Integrators are fed the angular velocity
sampled at the step boundaries, as they would be from a gyroscope.
"""

from __future__ import annotations

from typing import Callable, Sequence

import numpy as np
from scipy.integrate import solve_ivp

from .integration.base import QuaternionStepIntegrator, as_quaternion
from .math.quaternion import quat_conj, quat_derivative, quat_multiply, quat_normalize

RateProfile = Callable[[float], np.ndarray]


def _rate(rate_profile: RateProfile, t: float) -> np.ndarray:
    return np.ascontiguousarray(rate_profile(t), dtype=np.float64).reshape(3)


def reference_attitude(rate_profile: RateProfile, t_final: float, q0,
                       rtol: float = 1e-12, atol: float = 1e-12) -> np.ndarray:
    """Attitude at t_final starting from q0 at t = 0."""
    def f(t, q):
        return quat_derivative(np.ascontiguousarray(q), _rate(rate_profile, t))

    y0 = quat_normalize(as_quaternion(q0))
    sol = solve_ivp(f, (0.0, t_final), y0, method="DOP853", rtol=rtol, atol=atol)
    if not sol.success:
        raise RuntimeError(f"Reference integration failed: {sol.message}")
    return quat_normalize(np.ascontiguousarray(sol.y[:, -1]))


def propagate_profile(integrator: QuaternionStepIntegrator, rate_profile: RateProfile,
                      t_final: float, n_steps: int, q0) -> np.ndarray:
    """Attitude at t_final after n_steps equal steps of the given integrator."""
    if n_steps < 1:
        raise ValueError(f"Number of steps must be positive, got {n_steps}")
    dt = t_final / n_steps
    q = as_quaternion(q0)
    w_prev = _rate(rate_profile, 0.0)
    for k in range(1, n_steps + 1):
        w_next = _rate(rate_profile, k * dt)
        q = integrator.integrate(q, w_prev, w_next, dt)
        w_prev = w_next
    return q


def attitude_error(q: np.ndarray, q_ref: np.ndarray) -> float:
    """Rotation angle [rad] between two attitudes, insensitive to the sign of q."""
    dq = quat_multiply(quat_conj(as_quaternion(q_ref)), as_quaternion(q))
    # atan2 keeps precision for tiny angles where arccos does not
    return 2.0 * np.arctan2(np.linalg.norm(dq[1:]), np.abs(dq[0]))


def convergence_errors(integrator: QuaternionStepIntegrator, rate_profile: RateProfile,
                       t_final: float, step_counts: Sequence[int], q0) -> np.ndarray:
    """Final attitude error for each number of steps."""
    q_ref = reference_attitude(rate_profile, t_final, q0)
    return np.array([
        attitude_error(propagate_profile(integrator, rate_profile, t_final, n, q0), q_ref)
        for n in step_counts
    ])


def estimate_order(step_counts: Sequence[int], errors: Sequence[float]) -> float:
    """Observed order of accuracy: slope of log(error) against log(dt)."""
    dt = 1.0 / np.asarray(step_counts, dtype=float)
    slope, _ = np.polyfit(np.log(dt), np.log(np.asarray(errors, dtype=float)), 1)
    return float(slope)
