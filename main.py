#!/usr/bin/env python3
"""
Entry point for the POS order backend
"""

import logging

import uvicorn
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# pylint: disable=wrong-import-position
from pos_backend.api.app import create_app
from pos_backend.infrastructure.configuration.config import get_config
from pos_backend.infrastructure.logging.logging_config import setup_logging


def main():
    """Configure logging and serve the command surface"""
    config = get_config()
    setup_logging(config)
    logger = logging.getLogger(__name__)
    logger.info("Configuration loaded successfully")

    app = create_app(config)
    logger.info("Serving on %s:%s", config.api_host, config.api_port)
    uvicorn.run(app, host=config.api_host, port=config.api_port, log_config=None)


if __name__ == "__main__":
    main()
