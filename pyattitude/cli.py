"""
Gyro log replay.

Integrates an NDJSON log of gyro-v1 messages into an attitude and prints the
result as JSON: the final attitude by default, or one line per sample with
--history.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from typing import List, Optional

import numpy as np
import yaml

from .config import load_config
from .integration import parse_integrator_type
from .math.quaternion import quat_to_euler
from .messages import SchemaRegistry, read_gyro_messages
from .sequence import integrate_gyro_sequence

logger = logging.getLogger("pyattitude")


def _attitude_record(t: float, q: np.ndarray) -> dict:
    roll, pitch, yaw = quat_to_euler(q)
    return {
        "t": float(t),
        "q": [float(x) for x in q],
        "euler_rpy_rad": [float(roll), float(pitch), float(yaw)],
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Replay a gyro log into an attitude")
    parser.add_argument("--input", type=str, required=True,
                        help="NDJSON file of gyro-v1 messages")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to YAML configuration file")
    parser.add_argument("--integrator", type=str, default=None,
                        help="Override the configured integrator (e.g. suh, trawny, yuan)")
    parser.add_argument("--history", action="store_true",
                        help="Print the attitude after every sample")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
        if args.integrator is not None:
            cfg.integrator_type = parse_integrator_type(args.integrator)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    logging.basicConfig(level=cfg.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        registry = SchemaRegistry() if cfg.validate_messages else None
        timestamps, rates = read_gyro_messages(args.input, registry)
        logger.info("Integrating %d samples with %s", len(timestamps), cfg.integrator_type.name)
        history = integrate_gyro_sequence(timestamps, rates, cfg.initial_attitude,
                                          cfg.integrator_type, return_history=True)
    except Exception:
        logging.error(traceback.format_exc())
        return 1

    t_sorted = np.sort(timestamps)
    if len(t_sorted) == 0:
        print(json.dumps(_attitude_record(0.0, cfg.initial_attitude)))
    elif args.history:
        for t, q in zip(t_sorted, history):
            print(json.dumps(_attitude_record(t, q)))
    else:
        print(json.dumps(_attitude_record(t_sorted[-1], history[-1])))
    return 0


if __name__ == "__main__":
    sys.exit(main())
