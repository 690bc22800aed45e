from .base import DEFAULT_TYPE, IntegratorType, QuaternionStepIntegrator
from .euler import EulerQuaternionStepIntegrator
from .factory import create, parse_integrator_type
from .midpoint import MidPointQuaternionStepIntegrator
from .runge_kutta import RungeKuttaQuaternionStepIntegrator
from .suh import SuhQuaternionStepIntegrator
from .trawny import TrawnyQuaternionStepIntegrator
from .yuan import YuanQuaternionStepIntegrator

__all__ = [
    "DEFAULT_TYPE",
    "IntegratorType",
    "QuaternionStepIntegrator",
    "EulerQuaternionStepIntegrator",
    "MidPointQuaternionStepIntegrator",
    "RungeKuttaQuaternionStepIntegrator",
    "SuhQuaternionStepIntegrator",
    "TrawnyQuaternionStepIntegrator",
    "YuanQuaternionStepIntegrator",
    "create",
    "parse_integrator_type",
]
