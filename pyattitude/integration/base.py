"""
Quaternion step integrators.

All integrators share the same interface:

    q1 = integrator.integrate(q0, w0, w1, dt)

where ``q0`` is the attitude at the start of a sampling interval (scalar-first
unit quaternion), ``w0`` and ``w1`` are the body angular velocities [rad/s]
sampled at the start and end of the interval and ``dt`` is the interval
length [s]. The returned attitude is always renormalized.

Integrators hold no per-call state. Create one with
:func:`pyattitude.integration.create` and reuse it for every sample; the same
instance may be shared between threads.

Adding a new integrator
-----------------------
Subclass :class:`QuaternionStepIntegrator`, set ``integrator_type`` and
implement :meth:`_step` on already validated float64 arrays.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

import numpy as np


class IntegratorType(Enum):
    EULER_METHOD = "euler_method"
    MID_POINT = "mid_point"
    RUNGE_KUTTA = "runge_kutta"
    SUH = "suh"
    TRAWNY = "trawny"
    YUAN = "yuan"


DEFAULT_TYPE = IntegratorType.RUNGE_KUTTA


def as_quaternion(value, name: str = "quaternion") -> np.ndarray:
    """Copy a (4,) or (4,1) array-like into a flat float64 quaternion."""
    q = np.array(value, dtype=np.float64)
    if q.size != 4 or q.ndim > 2:
        raise ValueError(f"{name} must be a 4x1 or (4,) array, got shape {q.shape}")
    return np.ascontiguousarray(q.reshape(4))


def as_angular_velocity(value, name: str = "angular velocity") -> np.ndarray:
    """Copy a (3,) or (3,1) array-like into a flat float64 triad."""
    w = np.array(value, dtype=np.float64)
    if w.size != 3 or w.ndim > 2:
        raise ValueError(f"{name} must be a 3x1 or (3,) array, got shape {w.shape}")
    return np.ascontiguousarray(w.reshape(3))


def check_time_interval(dt) -> float:
    # NaN is not rejected: non-finite inputs propagate to the result
    dt = float(dt)
    if dt <= 0.0:
        raise ValueError(f"Time interval must be positive, got {dt}")
    return dt


class QuaternionStepIntegrator(ABC):
    """Abstract integrator of the attitude kinematics dq/dt = 0.5 * Omega(w) * q."""

    __slots__ = ()

    integrator_type: IntegratorType

    def get_type(self) -> IntegratorType:
        """Identifier this integrator was created from."""
        return self.integrator_type

    def integrate(self, q0, w0, w1, dt: float) -> np.ndarray:
        """
        Advance an attitude over one sampling interval.

        Args:
            q0: (4,) initial attitude, scalar-first unit quaternion
            w0: (3,) angular velocity at the start of the interval [rad/s]
            w1: (3,) angular velocity at the end of the interval [rad/s]
            dt: interval length [s], must be positive

        Returns:
            (4,) attitude at the end of the interval, unit norm

        Raises:
            ValueError: if dt is not positive, a vector has the wrong length
                or q0 has zero norm.
        """
        q = as_quaternion(q0, "initial attitude")
        norm = np.linalg.norm(q)
        if norm == 0.0:
            raise ValueError("Initial attitude must be a non-zero quaternion")
        return self._step(
            q / norm,
            as_angular_velocity(w0, "initial angular velocity"),
            as_angular_velocity(w1, "final angular velocity"),
            check_time_interval(dt),
        )

    @abstractmethod
    def _step(self, q0: np.ndarray, w0: np.ndarray, w1: np.ndarray, dt: float) -> np.ndarray:
        """Scheme-specific update on validated inputs."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
