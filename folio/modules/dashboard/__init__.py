"""
Dashboard Module
================

Admin dashboard for Folio: mounts the Dashboard Shell, which gates on the
admin role and loads the projects, site settings and skills tabs.

This is the module the entity editors plug into.
"""

from flask import Blueprint

# Blueprint name is 'admin' to avoid conflicts with site-specific user dashboards
dashboard_bp = Blueprint('admin', __name__, url_prefix='/admin')

from . import routes
from .shell import DashboardShell, MountResult, TABS

__all__ = ['dashboard_bp', 'DashboardShell', 'MountResult', 'TABS']
