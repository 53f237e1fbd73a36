"""
project: stagegen
module: __init__.py
License: MIT

Flask application factory for the stage generation service.

Configuration is sourced from environment variables (optionally loaded from a
local .env file) with defaults suitable for development. A local `instance/`
directory holds the rotating server log.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so STAGE_* settings can be supplied without exporting
# shell variables during development.
load_dotenv()


def create_app(overrides=None):
    """Build a Flask app with the stage API registered.

    ``overrides`` is applied last so tests can pin config values.
    """
    from stagegen.stage.config import StageConfig

    app = Flask(__name__, instance_relative_config=True)
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        # Read-only checkouts still serve requests; only file logging needs it.
        pass

    stage_config = StageConfig.from_env()
    app.config.update(
        STAGE_DEFAULT_ROOMS=int(os.getenv("STAGE_DEFAULT_ROOMS", "100")),
        STAGE_MAX_ROOMS=int(os.getenv("STAGE_MAX_ROOMS", "2500")),
        STAGE_STALL_FACTOR=stage_config.stall_budget_factor,
        STAGE_ENABLE_GENERATION_METRICS=stage_config.enable_metrics,
    )
    if overrides:
        app.config.update(overrides)

    from stagegen.routes.stage_api import bp_stage

    app.register_blueprint(bp_stage)

    # In non-debug mode answer with a small JSON body and log details under an id.
    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal error", "error_id": error_id}), 500

    return app
