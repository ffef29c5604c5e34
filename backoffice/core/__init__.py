"""
Backoffice Core
===============

Core utilities shared by the backoffice modules.
"""

from .config import Config, get_config_value
from .database import Database
from .logging_service import LoggingService, logger
from .api_client import StorefrontAPI, APIError, get_api, get_image_url

__all__ = [
    'Config', 'get_config_value', 'Database', 'LoggingService', 'logger',
    'StorefrontAPI', 'APIError', 'get_api', 'get_image_url'
]
