import os
from dotenv import load_dotenv

load_dotenv(override=True)

IS_PRODUCTION = (
    os.getenv('ENVIRONMENT') == 'production' or
    os.getenv('FLASK_ENV') == 'production' or
    os.getenv('NODE_ENV') == 'production'
)

DEV_CORS_ORIGINS = [
    'http://localhost:5173',
    'http://localhost:5174',
    'http://localhost:5175',
]


def _default_cors_origins():
    configured = os.getenv('CORS_ORIGINS')
    if configured:
        return [origin.strip() for origin in configured.split(',') if origin.strip()]
    if IS_PRODUCTION:
        return os.getenv('FRONTEND_URL') or '*'
    return DEV_CORS_ORIGINS


class Config:
    """
    Base configuration for the Showcase platform.
    Values come from the environment (or a .env file); a Flask app's own
    config takes precedence, see get_config_value().
    """
    ENVIRONMENT = 'production' if IS_PRODUCTION else os.getenv('ENVIRONMENT', 'development')

    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')
    MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', str(5 * 1024 * 1024)))

    # Bearer tokens
    # Required in production; development generates a throwaway one, see Showcase._check_secrets
    JWT_SECRET = os.getenv('JWT_SECRET')
    JWT_EXPIRES_HOURS = int(os.getenv('JWT_EXPIRES_HOURS', '24'))

    # Database paths
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    SHOWCASE_DB = os.getenv('SHOWCASE_DB', os.path.join(DB_DIR, 'showcase.db'))

    # Uploaded images live here and are served under /uploads
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))

    CORS_ORIGINS = _default_cors_origins()

    # Seed admin, created on startup when both are set
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')

    # Table names
    PROJECTS_TABLE = "projects"
    CLIENTS_TABLE = "clients"
    CONTACTS_TABLE = "contacts"
    SUBSCRIPTIONS_TABLE = "newsletter_subscriptions"
    ADMIN_TABLE = "admins"
    LOGS_TABLE = "app_logs"

    # Client side
    SHOWCASE_API_URL = os.getenv('SHOWCASE_API_URL', 'http://localhost:5000/api')
    SHOWCASE_STORAGE_PATH = os.getenv(
        'SHOWCASE_STORAGE_PATH',
        os.path.join(os.path.expanduser('~'), '.showcase', 'storage.json')
    )

    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None:
        return val
    return os.getenv(key, default)
