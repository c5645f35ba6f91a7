"""
Skills Module
=============

Admin API for skills: name, free-text category and a 0-100 proficiency.
"""

from flask import Blueprint

skills_bp = Blueprint('skills', __name__, url_prefix='/admin/api/skills')

from . import routes
from .controller import group_by_category

__all__ = ['skills_bp', 'group_by_category']
