"""
Folio Flask extension: constructs the gateways and registers the modules.
"""

import asyncio
import os

import click
from flask import current_app

from .core.config import Config
from .core.datastore import SqliteDataGateway
from .core.errors import FolioError
from .core.logging_service import LoggingService
from .core.notices import NoticeBoard
from .core.storage import build_storage_gateway


DEFAULT_FEATURES = {
    'auth': True,
    'dashboard': True,
    'projects': True,
    'settings': True,
    'skills': True,
    'public': True,
}

CONFIG_KEYS = [
    'FOLIO_DB', 'LOGS_DB', 'STORAGE_TYPE', 'DO_SPACES_REGION', 'DO_SPACES_NAME',
    'DO_SPACES_KEY', 'DO_SPACES_SECRET', 'SPACES_FOLDER', 'ADMIN_ROLE', 'CORS_ORIGINS',
]


class Folio:
    """
    Usage:
        app = Flask(__name__)
        folio = Folio(app, {'features': {'public': False}})
    """

    def __init__(self, app=None, config=None):
        self._config = config or {}
        self._registered = []
        self.data = None
        self.storage = None
        self.auth = None
        if app is not None:
            self.init_app(app)

    # ===== Setup =====

    def _resolve_config(self, app):
        """App config wins, then Config, with DB paths following DB_DIR"""
        if not app.config.get('SECRET_KEY'):
            app.config['SECRET_KEY'] = Config.SECRET_KEY

        db_dir = app.config.get('DB_DIR') or Config.DB_DIR
        app.config['DB_DIR'] = db_dir
        if not app.config.get('FOLIO_DB'):
            app.config['FOLIO_DB'] = os.getenv('FOLIO_DB') or os.path.join(db_dir, 'folio.db')
        if not app.config.get('LOGS_DB'):
            app.config['LOGS_DB'] = os.getenv('LOGS_DB') or os.path.join(db_dir, 'logs.db')

        for key in CONFIG_KEYS:
            if app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

    def _setup_database_dir(self, app):
        db_dir = app.config['DB_DIR']
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    def init_app(self, app):
        self._resolve_config(app)
        self._setup_database_dir(app)

        LoggingService.configure(app.config['LOGS_DB'])

        from .modules.auth import SessionAuthGateway

        self.data = SqliteDataGateway(app.config['FOLIO_DB'])
        self.data.init_schema()
        self.storage = build_storage_gateway(app.config, app.static_folder)
        self.auth = SessionAuthGateway(self.data)
        self.admin_role = app.config['ADMIN_ROLE']

        self._register_modules(app)
        self._register_error_handler(app)
        self._register_commands(app)

        app.extensions['folio'] = self
        LoggingService.info('system', "Folio initialised", {'modules': self._registered})

    def _features(self):
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        return features

    def _register_modules(self, app):
        features = self._features()

        if features['auth']:
            from .modules.auth import auth_bp
            app.register_blueprint(auth_bp)
            self._registered.append('auth')

        if features['dashboard']:
            from .modules.dashboard import dashboard_bp
            app.register_blueprint(dashboard_bp)
            self._registered.append('dashboard')

        if features['projects']:
            from .modules.projects import projects_bp
            app.register_blueprint(projects_bp)
            self._registered.append('projects')

        if features['settings']:
            from .modules.settings import settings_bp
            app.register_blueprint(settings_bp)
            self._registered.append('settings')

        if features['skills']:
            from .modules.skills import skills_bp
            app.register_blueprint(skills_bp)
            self._registered.append('skills')

        if features['public']:
            from .modules.public import public_bp
            app.register_blueprint(public_bp)
            self._registered.append('public')

    def _register_error_handler(self, app):
        from flask import jsonify

        @app.errorhandler(FolioError)
        def handle_folio_error(error):
            return jsonify({'error': str(error)}), error.status_code

    def _register_commands(self, app):
        from .modules.auth import create_user

        @app.cli.command('create-admin')
        @click.argument('email')
        @click.argument('password')
        def create_admin_command(email, password):
            """Create a user holding the admin role."""
            try:
                user = asyncio.run(create_user(self.data, email, password, roles=[self.admin_role]))
            except FolioError as e:
                raise click.ClickException(str(e))
            click.echo(f"Created admin {user['email']} ({user['id']})")

    def get_registered_modules(self):
        return list(self._registered)

    # ===== Request helpers =====

    def controllers(self, notices=None):
        """Fresh controllers sharing one NoticeBoard"""
        from .modules.projects.controller import ProjectsController
        from .modules.settings.controller import SiteSettingsController
        from .modules.skills.controller import SkillsController

        if notices is None:
            notices = NoticeBoard()
        return {
            'projects': ProjectsController(self.data, notices, self.storage),
            'settings': SiteSettingsController(self.data, notices, self.storage),
            'skills': SkillsController(self.data, notices),
        }


def current_folio():
    return current_app.extensions['folio']
