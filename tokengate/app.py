# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from tokengate.infrastructure.container import Container
from tokengate.infrastructure.db import check_connection, init_db
from tokengate.shared.config import load_config
from tokengate.shared.logging import install_exception_hooks, logger, setup_logging
from tokengate.shared.middleware.error_handler import configure_error_handling
from tokengate.shared.middleware.request_logger import configure_request_logging


def create_app(container: Container | None = None) -> Flask:
    config = load_config()
    setup_logging(debug_mode=config.debug_logging)
    install_exception_hooks()
    init_db()

    container = container or Container(config)

    app = Flask(__name__)
    app.json.sort_keys = False
    app.extensions["tokengate.container"] = container
    configure_error_handling(app)
    configure_request_logging(app)

    cors_kwargs: dict[str, object] = {"origins": config.security.allowed_origins}
    CORS(app, **cors_kwargs)

    app.register_blueprint(container.auth_controller.as_blueprint())
    app.register_blueprint(container.data_controller.as_blueprint())

    logger.info(f"Flask app initialized (env={config.app_env})")
    return app


def main() -> None:
    config = load_config()
    app = create_app()
    logger.info(f"Server running on port {config.port}")
    check_connection()
    app.run(host="0.0.0.0", port=config.port, debug=False, threaded=True)


if __name__ == "__main__":
    main()
