"""
Showcase - Portfolio & Testimonials Platform
============================================

A Flask REST backend plus the client-side logic that drives it:
- Public projects and client testimonials
- Contact form and newsletter capture
- Bearer-token protected admin CRUD with image upload and cropping

Usage:
    from showcase import Showcase

    app = Flask(__name__)
    Showcase(app)

or simply:

    from showcase import create_app
    app = create_app()
"""

import logging
import os
import secrets
import click
from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS

from .core import Config, register_error_handlers

__version__ = '0.1.0'

logger = logging.getLogger(__name__)

MODULES = ['auth', 'projects', 'clients', 'contact', 'newsletter']


class Showcase:
    """Flask extension wiring config, blueprints, CORS and error handling"""

    def __init__(self, app=None, config=None):
        self._config = dict(config or {})
        self._registered = []
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config(app)
        self._check_secrets(app)
        self._setup_directories(app)

        CORS(
            app,
            resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}},
            supports_credentials=True,
        )
        register_error_handlers(app)
        self._register_modules(app)
        self._register_core_routes(app)
        self._register_commands(app)

        with app.app_context():
            self._init_database(app)

        app.extensions['showcase'] = self

    def get_registered_modules(self):
        return list(self._registered)

    def _apply_config(self, app):
        """Fill app.config from Config without overriding what the app already set"""
        for key in dir(Config):
            # Flask pre-fills some keys (SECRET_KEY, MAX_CONTENT_LENGTH) with None
            if key.isupper() and app.config.get(key) is None:
                app.config[key] = getattr(Config, key)
        for key, value in self._config.items():
            app.config[key] = value

        # Keep the database next to DB_DIR when only DB_DIR was overridden
        if 'SHOWCASE_DB' not in self._config and app.config['DB_DIR'] != Config.DB_DIR \
                and app.config['SHOWCASE_DB'] == Config.SHOWCASE_DB:
            app.config['SHOWCASE_DB'] = os.path.join(app.config['DB_DIR'], 'showcase.db')

    def _check_secrets(self, app):
        """Refuse to sign admin tokens with a missing secret in production"""
        if app.config.get('JWT_SECRET'):
            return
        if app.config.get('ENVIRONMENT') == 'production':
            raise RuntimeError('JWT_SECRET must be set in production')

        app.config['JWT_SECRET'] = secrets.token_hex(32)
        logger.warning("JWT_SECRET is not set; using a random secret, tokens will not survive a restart")

    def _setup_directories(self, app):
        os.makedirs(app.config['DB_DIR'], exist_ok=True)
        os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    def _register_modules(self, app):
        from .modules.auth import auth_bp
        from .modules.projects import projects_bp, admin_projects_bp
        from .modules.clients import clients_bp, admin_clients_bp
        from .modules.contact import contact_bp, admin_contacts_bp
        from .modules.newsletter import newsletter_bp, admin_subscriptions_bp

        blueprints = {
            'auth': [auth_bp],
            'projects': [projects_bp, admin_projects_bp],
            'clients': [clients_bp, admin_clients_bp],
            'contact': [contact_bp, admin_contacts_bp],
            'newsletter': [newsletter_bp, admin_subscriptions_bp],
        }
        for name in MODULES:
            for bp in blueprints[name]:
                app.register_blueprint(bp)
            self._registered.append(name)

    def _register_core_routes(self, app):
        @app.route('/')
        def index():
            return jsonify({'message': 'Showcase Platform API'})

        @app.route('/uploads/<path:filename>')
        def uploaded_file(filename):
            return send_from_directory(app.config['UPLOAD_FOLDER'], filename)

    def _register_commands(self, app):
        @app.cli.command('create-admin')
        @click.argument('username')
        @click.argument('password')
        def create_admin(username, password):
            """Create an admin account"""
            from .modules.auth import AdminDatabase
            if AdminDatabase.ensure_admin(username, password):
                click.echo(f"Admin '{username}' created")
            else:
                click.echo(f"Admin '{username}' already exists")

        @app.cli.command('cleanup-logs')
        @click.option('--days', default=30, show_default=True, help='Keep entries newer than this')
        def cleanup_logs(days):
            """Delete old app_logs entries"""
            from .core import LoggingService
            deleted = LoggingService.cleanup_old_logs(days)
            click.echo(f"Deleted {deleted} log entries")

    def _init_database(self, app):
        from .modules.auth import AdminDatabase
        from .modules.projects import ProjectDatabase
        from .modules.clients import ClientDatabase
        from .modules.contact import ContactDatabase
        from .modules.newsletter import SubscriptionDatabase

        for table in (AdminDatabase, ProjectDatabase, ClientDatabase, ContactDatabase, SubscriptionDatabase):
            table.init_table()

        if AdminDatabase.ensure_admin(app.config.get('ADMIN_USERNAME'), app.config.get('ADMIN_PASSWORD')):
            logger.info("Seeded admin account %s", app.config['ADMIN_USERNAME'])


def create_app(config=None):
    """Application factory"""
    app = Flask(__name__)
    Showcase(app, config)
    return app


__all__ = ['Showcase', 'create_app']
