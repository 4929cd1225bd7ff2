"""
Run the API server: ``python -m crud_backend``.

The bind address comes from settings (SERVER_ADDRESS or server.address in
the YAML file named by CONFIG_FILE). uvicorn handles SIGINT/SIGTERM and
shuts the server down gracefully.
"""

import logging
import sys

import uvicorn

from .main import create_app
from .settings import ConfigError, get_settings, parse_address

logger = logging.getLogger(__name__)


def main() -> None:
    try:
        settings = get_settings()
        host, port = parse_address(settings.server_address)
    except ConfigError as e:
        sys.exit(f"Failed to load configuration: {e}")

    app = create_app(settings)
    logger.info("Server starting on %s:%s", host, port)
    uvicorn.run(app, host=host, port=port, log_config=None)
    logger.info("Server exited properly")


if __name__ == "__main__":
    main()
