"""Quaternion attitude propagation from gyroscope samples."""

from .integration import (
    DEFAULT_TYPE,
    IntegratorType,
    QuaternionStepIntegrator,
    create,
)
from .sequence import integrate_gyro_sequence

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TYPE",
    "IntegratorType",
    "QuaternionStepIntegrator",
    "create",
    "integrate_gyro_sequence",
]
