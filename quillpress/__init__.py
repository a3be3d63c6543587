"""
Quillpress - A Flask Blog CMS
=============================

A small server-rendered blog with:
- Public article listing, detail pages, search, sitemap and robots.txt
- A password-gated admin area for writing, publishing and deleting articles
- Image upload to a local folder or an S3-compatible bucket

Usage:
    from flask import Flask
    from quillpress import Quillpress

    app = Flask(__name__)
    Quillpress(app)

Or build a ready application:
    from quillpress import create_app
    app = create_app({'POSTS_DB': '/var/lib/blog/posts.db'})
"""

__version__ = '0.1.0'

import os

from flask import Flask, Response, send_from_directory
from jinja2 import ChoiceLoader, FileSystemLoader

from .core.config import Config

# Keys copied from Config into app.config unless the app already sets them
CONFIG_KEYS = [
    'SECRET_KEY', 'DB_DIR', 'POSTS_DB', 'LOGS_DB', 'PUBLIC_FOLDER',
    'STORAGE_BACKEND', 'UPLOAD_FOLDER', 'S3_BUCKET', 'S3_REGION', 'S3_ENDPOINT_URL',
    'S3_ACCESS_KEY', 'S3_SECRET_KEY', 'S3_PREFIX',
    'ADMIN_USERNAME', 'ADMIN_PASSWORD', 'ADMIN_PASSWORD_HASH', 'SESSION_MAX_AGE',
    'SITE_NAME', 'SITE_URL', 'HOMEPAGE_PAGE_SIZE', 'SEARCH_LIMIT', 'ADMIN_PAGE_SIZE',
]

DATABASE_FILES = {
    'POSTS_DB': 'posts.db',
    'LOGS_DB': 'logs.db',
}

DEFAULT_FEATURES = {
    'static_fallback': True,
}

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'templates')


class Quillpress:
    """Flask extension that registers the blog's modules in routing priority order."""

    def __init__(self, app=None, config=None):
        self._config = {}
        self._registered = []
        if app is not None:
            self.init_app(app, config)

    def init_app(self, app, config=None):
        self._config = dict(config or {})
        features = dict(DEFAULT_FEATURES)
        features.update(self._config.get('features', {}))
        self._config['features'] = features
        self._config.setdefault('brand_name', app.config.get('SITE_NAME') or Config.SITE_NAME)

        self._derive_database_paths(app)
        for key in CONFIG_KEYS:
            if app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

        self._setup_database_dir(app)
        self._setup_templates(app)

        from .modules.auth.utils import configure_credentials
        configure_credentials(app)

        self._register_blueprints(app, features)

        with app.app_context():
            from .modules.posts.database import init_posts_db
            init_posts_db()

        @app.context_processor
        def inject_quillpress():
            return {
                'quillpress_config': self._config,
                'brand_name': self._config['brand_name'],
            }

        app.register_error_handler(404, _not_found)
        # A path with no route for this method is just as unknown
        app.register_error_handler(405, _not_found)

        app.extensions['quillpress'] = self
        print(f"[QUILLPRESS] Registered modules: {', '.join(self._registered)}")

    def _derive_database_paths(self, app):
        """Database files follow an app-level DB_DIR unless their own paths are set"""
        db_dir = app.config.get('DB_DIR')
        if not db_dir:
            return
        for key, filename in DATABASE_FILES.items():
            if app.config.get(key) is None and not os.getenv(key):
                app.config[key] = os.path.join(db_dir, filename)

    def _setup_database_dir(self, app):
        os.makedirs(app.config['DB_DIR'], exist_ok=True)
        for key in ('POSTS_DB', 'LOGS_DB'):
            db_dir = os.path.dirname(app.config[key])
            if db_dir:
                os.makedirs(db_dir, exist_ok=True)

    def _setup_templates(self, app):
        # Shared layout sits beside the app's own templates, which win
        loaders = [loader for loader in (app.jinja_loader, FileSystemLoader(TEMPLATE_DIR)) if loader]
        app.jinja_loader = ChoiceLoader(loaders)

    def _register_blueprints(self, app, features):
        """Most specific routes first, the static-asset catch-all last"""
        from .modules.auth import auth_bp
        app.register_blueprint(auth_bp)
        self._registered.append('auth')

        from .modules.posts_public import posts_public_bp
        app.register_blueprint(posts_public_bp)
        self._registered.append('posts_public')

        from .modules.posts import posts_bp
        app.register_blueprint(posts_bp)
        self._registered.append('posts')

        from .modules.images import images_bp
        app.register_blueprint(images_bp)
        self._registered.append('images')

        if features.get('static_fallback'):
            app.add_url_rule('/<path:filename>', 'public_asset', _public_asset)
            self._registered.append('static_fallback')

    def get_registered_modules(self):
        return list(self._registered)

    @property
    def config(self):
        return self._config


def _public_asset(filename):
    """Anything no other route claims is looked up in PUBLIC_FOLDER"""
    from flask import current_app
    return send_from_directory(current_app.config['PUBLIC_FOLDER'], filename)


def _not_found(error):
    return Response('404 Not Found', status=404, mimetype='text/plain')


def create_app(overrides=None, config=None):
    """Build a Flask app with every Quillpress module enabled"""
    app = Flask(__name__, static_folder=None)
    app.config.update(overrides or {})
    Quillpress(app, config)
    return app


__all__ = ['Quillpress', 'create_app', 'Config']
