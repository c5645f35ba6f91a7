"""
Projects Admin Module
=====================

Admin API for the portfolio projects collection.
Plugs into the admin dashboard module.

Provides:
- Project creation, editing and deletion
- Image upload into the pending project form
- Tech stack entry as comma-separated text
"""

from flask import Blueprint

projects_bp = Blueprint('projects_admin', __name__, url_prefix='/admin/api/projects')

from . import routes

__all__ = ['projects_bp']
