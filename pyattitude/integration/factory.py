from __future__ import annotations

from typing import Optional, Union

from .base import DEFAULT_TYPE, IntegratorType, QuaternionStepIntegrator
from .euler import EulerQuaternionStepIntegrator
from .midpoint import MidPointQuaternionStepIntegrator
from .runge_kutta import RungeKuttaQuaternionStepIntegrator
from .suh import SuhQuaternionStepIntegrator
from .trawny import TrawnyQuaternionStepIntegrator
from .yuan import YuanQuaternionStepIntegrator


_INTEGRATORS = {
    IntegratorType.EULER_METHOD: EulerQuaternionStepIntegrator,
    IntegratorType.MID_POINT: MidPointQuaternionStepIntegrator,
    IntegratorType.RUNGE_KUTTA: RungeKuttaQuaternionStepIntegrator,
    IntegratorType.SUH: SuhQuaternionStepIntegrator,
    IntegratorType.TRAWNY: TrawnyQuaternionStepIntegrator,
    IntegratorType.YUAN: YuanQuaternionStepIntegrator,
}


def parse_integrator_type(value: Union[IntegratorType, str, None]) -> IntegratorType:
    """Map a selector (enum, enum name or enum value, any case) to an IntegratorType."""
    if value is None:
        return DEFAULT_TYPE
    if isinstance(value, IntegratorType):
        return value
    if isinstance(value, str):
        s = value.strip()
        for integrator_type in IntegratorType:
            if s.upper() == integrator_type.name or s.lower() == integrator_type.value:
                return integrator_type
    raise ValueError(f"Invalid integrator type: {value!r}")


def create(integrator_type: Optional[Union[IntegratorType, str]] = None) -> QuaternionStepIntegrator:
    """
    Create a step integrator.

    Args:
        integrator_type: integrator to build; defaults to Runge-Kutta

    Returns:
        A stateless integrator, reusable for any number of steps
    """
    return _INTEGRATORS[parse_integrator_type(integrator_type)]()
