"""
Folio Auth Module

Provides admin authentication:
- Email/password sign-in establishing a cookie session
- Sign-out through the auth gateway
- Session Guard gating the dashboard on the admin role
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__, url_prefix='/admin')

from . import routes
from .gateway import SessionAuthGateway, create_user
from .guard import SessionGuard, admin_api_required

__all__ = ['auth_bp', 'SessionAuthGateway', 'SessionGuard', 'create_user',
           'admin_api_required']
