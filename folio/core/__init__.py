"""
Folio Core
==========

Gateways, record models, controllers and shared services for Folio modules.
"""

from .config import Config, get_config_value
from .database import Database
from .logging_service import LoggingService

__all__ = ['Config', 'get_config_value', 'Database', 'LoggingService']
