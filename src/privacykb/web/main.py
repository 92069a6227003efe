"""Privacy knowledge base web application."""

import logging

from privacykb.config import ConfigManager
from privacykb.system.structlog_configurator import configure_structlog
from privacykb.web.core.factory import create_app

# Configure logging before anything else imports and creates loggers
config_manager = ConfigManager()
config = config_manager.load()
configure_structlog(config)

# Disable uvicorn access logger since we have our own structured logging middleware
uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.disabled = True

app = create_app()
