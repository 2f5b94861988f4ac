"""trusted_content package: app/core/infra/shared.

Expose the HTTP application factory and settings at the package level.
"""

from .app.server import create_app
from .config.settings import AppConfig

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "create_app",
    "AppConfig",
]
