from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..core.exceptions import AuthorizationError, ValidationError

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(AuthorizationError)
    def _authorization_error(e: AuthorizationError):
        logger.info("Forbidden: %s", e)
        return jsonify({"success": False, "message": str(e)}), 403
