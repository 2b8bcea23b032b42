"""Main entry point for the review relay."""

import logging

import uvicorn

from .config import RelayConfig
from .webapp import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    """Load configuration from the environment and serve the webhook endpoint."""
    config = RelayConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        "Starting review relay on %s:%d (%d USERMAP entries)",
        config.host,
        config.port,
        len(config.identity_map),
    )
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
