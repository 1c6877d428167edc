"""
Showcase Core
=============

Core utilities and shared functionality for Showcase modules.
"""

from .config import Config, get_config_value
from .database import Database
from .logging_service import LoggingService
from .responses import APIError, api_response, api_error, get_json_body, register_error_handlers

__all__ = [
    'Config', 'get_config_value', 'Database', 'LoggingService',
    'APIError', 'api_response', 'api_error', 'get_json_body', 'register_error_handlers',
]
