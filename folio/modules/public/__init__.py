"""
Public API Module
=================

Read-only JSON for the public site pages (home, about, projects), with CORS
for the origins in CORS_ORIGINS.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__, url_prefix='/api/public')

from . import routes
from .routes import SITE_DEFAULTS, settings_with_defaults

__all__ = ['public_bp', 'SITE_DEFAULTS', 'settings_with_defaults']
