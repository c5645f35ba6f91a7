import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for Folio.
    Sites should provide database paths and storage credentials via environment variables.
    """
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY') or os.getenv('SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Database paths - use environment variables or fallback to DB_DIR
    FOLIO_DB = os.getenv('FOLIO_DB', os.path.join(DB_DIR, 'folio.db'))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, 'logs.db'))

    # Storage: 'local' writes under the app static folder, 'cloud' uses DigitalOcean Spaces
    STORAGE_TYPE = os.getenv('STORAGE_TYPE', 'local')
    DO_SPACES_REGION = os.getenv('DO_SPACES_REGION')
    DO_SPACES_NAME = os.getenv('DO_SPACES_NAME')
    DO_SPACES_KEY = os.getenv('DO_SPACES_KEY')
    DO_SPACES_SECRET = os.getenv('DO_SPACES_SECRET')
    SPACES_FOLDER = os.getenv('SPACES_FOLDER', 'site-images')

    # Role a user needs to reach the dashboard
    ADMIN_ROLE = os.getenv('ADMIN_ROLE', 'admin')

    # Origins allowed to read the public API
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',') if o.strip()]


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val:
        return val
    return os.getenv(key, default)
