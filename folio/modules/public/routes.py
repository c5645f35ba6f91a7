"""
Public API Routes
=================

GET /api/public/projects       - projects ordered by order_index
GET /api/public/skills         - skills grouped by category
GET /api/public/site-settings  - settings, every missing field filled from defaults
"""

from flask import current_app, jsonify
from flask_cors import cross_origin

from . import public_bp
from ...core.config import get_config_value
from ...core.errors import FolioError
from ...core.logging_service import LoggingService
from ..projects.controller import ProjectsController
from ..projects.models import Project
from ..settings.models import SETTINGS_FIELDS, SiteSettings
from ..skills.controller import SkillsController, group_by_category
from ..skills.models import Skill

# Used when no settings record exists, or a field of it is empty
SITE_DEFAULTS = {
    'hero_image_url': '/static/hero-image.jpg',
    'hero_title': 'Welcome to my portfolio',
    'hero_subtitle': 'Full Stack Developer & Creative Problem Solver',
    'bio': None,
    'location': None,
    'availability': None,
    'email': None,
    'github_url': 'https://github.com',
    'linkedin_url': 'https://linkedin.com',
    'twitter_url': 'https://twitter.com',
}


def settings_with_defaults(record, defaults=None):
    """Merge a settings record (or None) over the defaults"""
    merged = dict(SITE_DEFAULTS)
    merged.update(defaults or {})
    if record is not None:
        for field in SETTINGS_FIELDS:
            value = getattr(record, field)
            if value:
                merged[field] = value
    return merged


def _call(method, *args, **kwargs):
    """Run a record store coroutine from a sync view"""
    from ... import current_folio
    return current_app.ensure_sync(getattr(current_folio().data, method))(*args, **kwargs)


@public_bp.route('/projects', methods=['GET', 'OPTIONS'])
@cross_origin(supports_credentials=False)
def public_projects():
    rows = _call('list', 'projects', order_by=ProjectsController.order_by)
    return jsonify([project.model_dump() for project in Project.ingest_many(rows)])


@public_bp.route('/skills', methods=['GET', 'OPTIONS'])
@cross_origin(supports_credentials=False)
def public_skills():
    rows = _call('list', 'skills', order_by=SkillsController.order_by)
    grouped = group_by_category(Skill.ingest_many(rows))
    return jsonify([
        {'category': category, 'skills': [skill.model_dump() for skill in members]}
        for category, members in grouped.items()
    ])


@public_bp.route('/site-settings', methods=['GET', 'OPTIONS'])
@cross_origin(supports_credentials=False)
def public_site_settings():
    record = None
    try:
        row = _call('get_singleton', 'site_settings')
        record = SiteSettings.ingest(row) if row is not None else None
    except FolioError as e:
        LoggingService.error('public', "Error fetching site settings", {'error': str(e)})
    return jsonify(settings_with_defaults(record, get_config_value('SITE_DEFAULTS')))
