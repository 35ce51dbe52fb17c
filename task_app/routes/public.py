"""
Public, unauthenticated endpoints.

Endpoints:
    GET /        -- Welcome message.
    GET /health  -- Liveness / readiness probe for orchestration tools.
"""

from __future__ import annotations

import logging
import os

from flask import Blueprint, Response, jsonify

logger = logging.getLogger(__name__)

public_bp = Blueprint("public", __name__)


@public_bp.route("/", methods=["GET"])
def home() -> tuple[Response, int]:
    logger.info("Root endpoint accessed")
    return jsonify({"message": "Welcome to the task manager API"}), 200


@public_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """
    Liveness / readiness health-check endpoint.

    Returns:
        A 200 JSON response with ``status``, ``service``, and
        ``environment`` fields.
    """
    return jsonify(
        {
            "status": "healthy",
            "service": "tasks",
            "environment": os.getenv("ENVIRONMENT", "unknown"),
        }
    ), 200
