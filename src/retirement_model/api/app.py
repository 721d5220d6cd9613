from __future__ import annotations

import logging
import os
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, request

from ..calculator import project_retirement
from ..montecarlo import (
    InvalidConfiguration,
    MonteCarloConfig,
    MonteCarloSimulator,
    RetirementInput,
)
from ..montecarlo.calibrator import DEFAULT_TARGET_SUCCESS


app = Flask(__name__)
logger = logging.getLogger(__name__)


def _to_float(value: Any, default: float) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return default
    return default


def _simulation_options(payload: Dict[str, Any]) -> Dict[str, Any]:
    # Options may sit beside the input fields or under "options"
    options = {key: value for key, value in payload.items() if key != "options"}
    nested = payload.get("options")
    if isinstance(nested, dict):
        options.update(nested)
    return options


def _read_payload() -> Tuple[Dict[str, Any] | None, Tuple[Any, int] | None]:
    payload = request.get_json(silent=True)
    if payload is None:
        return None, (jsonify({"success": False, "error": "Request JSON body is required"}), 400)
    if not isinstance(payload, dict):
        return None, (jsonify({"success": False, "error": "Request JSON body must be an object"}), 400)
    return payload, None


def _invalid(error: InvalidConfiguration) -> Tuple[Any, int]:
    logger.warning("Rejected request: %s", error)
    return jsonify({"success": False, "error": str(error)}), 400


def _simulate(payload: Dict[str, Any]) -> Dict[str, Any]:
    inputs = RetirementInput.from_dict(payload).validate()
    config = MonteCarloConfig.from_options(_simulation_options(payload))
    report = MonteCarloSimulator(config=config).run(inputs)
    include_paths = payload.get("includePaths", True) is not False
    return {"success": True, **report.to_dict(include_paths=include_paths)}


def _calibrate(payload: Dict[str, Any]) -> Dict[str, Any]:
    inputs = RetirementInput.from_dict(payload).validate()
    config = MonteCarloConfig.from_options(_simulation_options(payload))
    target = _to_float(payload.get("targetSuccess"), DEFAULT_TARGET_SUCCESS)
    result = MonteCarloSimulator(config=config).calibrate(inputs, target_success=target)
    return {"success": True, **result.to_dict()}


@app.get("/health")
def health() -> Tuple[Any, int]:
    return jsonify({"ok": True, "service": "retirement-model-api"}), 200


@app.post("/retirement/api/v1/simulate")
def simulate() -> Tuple[Any, int]:
    payload, error = _read_payload()
    if error is not None:
        return error
    try:
        return jsonify(_simulate(payload)), 200
    except InvalidConfiguration as e:
        return _invalid(e)


@app.post("/retirement/api/v1/calibrate")
def calibrate() -> Tuple[Any, int]:
    payload, error = _read_payload()
    if error is not None:
        return error
    try:
        return jsonify(_calibrate(payload)), 200
    except InvalidConfiguration as e:
        return _invalid(e)


@app.post("/retirement/api/v1/project")
def project() -> Tuple[Any, int]:
    payload, error = _read_payload()
    if error is not None:
        return error
    try:
        projection = project_retirement(RetirementInput.from_dict(payload))
    except InvalidConfiguration as e:
        return _invalid(e)
    return jsonify({"success": True, **projection.to_dict()}), 200


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    port = int(os.getenv("PORT", "8001"))
    app.run(host="0.0.0.0", port=port, debug=False)
