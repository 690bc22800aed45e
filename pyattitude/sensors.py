from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

import numpy as np


@dataclass
class GyroSensorConfig:
    rate_hz: float
    sigma_radps: float = 0.0
    bias_rw_sigma: Optional[float] = None


class DeterministicRNG:
    def __init__(self, seed: int):
        self.rng = np.random.default_rng(seed)

    def normal(self, mean: float, sigma: float, size: Tuple[int, ...] | int) -> np.ndarray:
        return self.rng.normal(loc=mean, scale=sigma, size=size)


class GyroSynthesizer:
    """Emits gyro-v1 messages from a true body rate at a fixed sample rate."""

    def __init__(self, cfg: GyroSensorConfig, rng: DeterministicRNG):
        if cfg.rate_hz <= 0:
            raise ValueError(f"Gyro rate must be positive, got {cfg.rate_hz}")
        self.cfg = cfg
        self.rng = rng
        self._next_emit = 0.0
        self.seq = 0
        self.bias = np.zeros(3)

    def step_bias(self):
        if self.cfg.bias_rw_sigma is not None and self.cfg.bias_rw_sigma > 0:
            self.bias += self.rng.normal(0.0, self.cfg.bias_rw_sigma, 3)

    def maybe_emit(self, t_sim: float, omega_body_true: np.ndarray) -> Optional[dict]:
        if t_sim + 1e-9 < self._next_emit:
            return None
        self._next_emit = t_sim + 1.0 / self.cfg.rate_hz
        self.seq += 1
        self.step_bias()

        omega_meas = np.asarray(omega_body_true, dtype=float) + self.bias
        if self.cfg.sigma_radps > 0:
            omega_meas = omega_meas + self.rng.normal(0.0, self.cfg.sigma_radps, 3)
        msg = {
            "type": "sensor",
            "protocol_version": "1.0",
            "schema_version": "gyro-v1",
            "sensor": "gyro",
            "t_sim": float(t_sim),
            # For determinism in logs, omit wall-clock timestamp
            "t_sent": None,
            "seq": self.seq,
            "payload": {
                "omega_body": [float(x) for x in omega_meas],
            },
        }
        return msg


def synthesize_gyro_stream(rate_profile: Callable[[float], np.ndarray], t_final: float,
                           cfg: GyroSensorConfig, seed: int = 0) -> List[dict]:
    """Sample rate_profile(t) on [0, t_final] into a list of gyro-v1 messages."""
    gyro = GyroSynthesizer(cfg, DeterministicRNG(seed))
    n_samples = int(np.floor(t_final * cfg.rate_hz + 1e-9)) + 1
    messages = []
    for k in range(n_samples):
        t = k / cfg.rate_hz
        msg = gyro.maybe_emit(t, rate_profile(t))
        if msg is not None:
            messages.append(msg)
    return messages
