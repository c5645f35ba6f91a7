"""
Settings Module
===============

Admin API for the site settings record (hero, bio, contact and social links).
There is at most one settings record; saving inserts it the first time and
updates it afterwards.
"""

from flask import Blueprint

settings_bp = Blueprint('settings', __name__, url_prefix='/admin/api/site-settings')

from . import routes
