from __future__ import annotations

import json
import logging
import os
from typing import Iterable, Optional, Tuple

import numpy as np
from jsonschema import Draft202012Validator

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                                   "schemas", "protocol_schema.json")


def load_protocol_schemas(schema_path: Optional[str] = None) -> dict:
    if schema_path is None:
        schema_path = DEFAULT_SCHEMA_PATH
    with open(schema_path, "r", encoding="utf-8") as f:
        return json.load(f)


class SchemaRegistry:
    def __init__(self, schemas: Optional[dict] = None):
        self.schemas = schemas if schemas is not None else load_protocol_schemas()
        self.validators = {
            "gyro-v1": Draft202012Validator(self.schemas["sensor-gyro-v1"]),
        }

    def validate_sensor(self, msg: dict) -> None:
        schema_version = msg.get("schema_version", "")
        if schema_version not in self.validators:
            raise ValueError(f"Unknown sensor schema: {schema_version}")
        self.validators[schema_version].validate(msg)


def read_gyro_messages(path: str, registry: Optional[SchemaRegistry] = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Read an NDJSON log of gyro-v1 messages.

    Args:
        path: file with one JSON message per line; blank lines are skipped
        registry: validates every message when given

    Returns:
        (timestamps (N,), angular rates (N, 3)) in file order

    Raises:
        ValueError: on a line that is not valid JSON
        jsonschema.ValidationError: on a message rejected by the registry
    """
    timestamps = []
    rates = []
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                msg = json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path}:{line_number}: invalid JSON ({e.msg})") from e
            if registry is not None:
                registry.validate_sensor(msg)
            timestamps.append(float(msg["t_sim"]))
            rates.append([float(x) for x in msg["payload"]["omega_body"]])

    logger.debug("Read %d gyro messages from %s", len(timestamps), path)
    return np.array(timestamps, dtype=float), np.array(rates, dtype=float).reshape(-1, 3)


def write_gyro_messages(path: str, messages: Iterable[dict]) -> int:
    """Write messages as NDJSON; returns the number of lines written."""
    count = 0
    with open(path, "w", encoding="utf-8") as f:
        for msg in messages:
            f.write(json.dumps(msg, separators=(",", ":")) + "\n")
            count += 1
    return count
