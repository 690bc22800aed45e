from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np
import yaml

from .integration import IntegratorType, parse_integrator_type
from .integration.base import as_quaternion

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "config_default.yaml")


@dataclass
class IntegrationConfig:
    integrator_type: IntegratorType = IntegratorType.RUNGE_KUTTA
    initial_attitude: np.ndarray = field(default_factory=lambda: np.array([1.0, 0.0, 0.0, 0.0]))
    validate_messages: bool = True
    log_level: str = "INFO"


def load_config(config_path: Optional[str] = None, config: Optional[Dict[str, Any]] = None) -> IntegrationConfig:
    """
    Build an IntegrationConfig from a dict or a YAML file.

    A dict takes precedence over a path; with neither, the packaged
    config_default.yaml is used. Missing keys keep their defaults.
    """
    if config is not None:
        cfg = config
    else:
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    integration_section = cfg.get("integration", {}) or {}
    messages_section = cfg.get("messages", {}) or {}
    logging_section = cfg.get("logging", {}) or {}

    initial_attitude = integration_section.get("initial_attitude")
    if initial_attitude is None:
        q0 = np.array([1.0, 0.0, 0.0, 0.0])
    else:
        q0 = as_quaternion(initial_attitude, "initial_attitude")
        if np.linalg.norm(q0) == 0.0:
            raise ValueError("initial_attitude must be a non-zero quaternion")

    log_level = str(logging_section.get("level", "INFO")).upper()
    if log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        raise ValueError(f"Invalid logging level: {log_level}")

    return IntegrationConfig(
        integrator_type=parse_integrator_type(integration_section.get("integrator")),
        initial_attitude=q0,
        validate_messages=bool(messages_section.get("validate", True)),
        log_level=log_level,
    )
