import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for Quillpress.
    Deployments provide paths, storage bindings and the admin identity via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    POSTS_DB = os.getenv('POSTS_DB', os.path.join(DB_DIR, "posts.db"))
    LOGS_DB = os.getenv('LOGS_DB', os.path.join(DB_DIR, "logs.db"))

    # Table names
    POSTS_TABLE = "posts"
    LOGS_TABLE = "app_logs"

    # Static assets served by the catch-all route
    PUBLIC_FOLDER = os.getenv('PUBLIC_FOLDER', os.path.join(os.getcwd(), 'public'))

    # Blob storage: 'local' or 's3'
    STORAGE_BACKEND = os.getenv('STORAGE_BACKEND', 'local')
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join(os.getcwd(), 'uploads'))
    S3_BUCKET = os.getenv('S3_BUCKET')
    S3_REGION = os.getenv('S3_REGION', 'auto')
    S3_ENDPOINT_URL = os.getenv('S3_ENDPOINT_URL')
    S3_ACCESS_KEY = os.getenv('S3_ACCESS_KEY')
    S3_SECRET_KEY = os.getenv('S3_SECRET_KEY')
    S3_PREFIX = os.getenv('S3_PREFIX', '')

    # Admin identity
    # ADMIN_PASSWORD_HASH wins; a plain ADMIN_PASSWORD is hashed at startup
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')
    ADMIN_PASSWORD_HASH = os.getenv('ADMIN_PASSWORD_HASH')
    SESSION_MAX_AGE = int(os.getenv('SESSION_MAX_AGE', '86400'))

    # Site
    SITE_NAME = os.getenv('SITE_NAME', 'Blog CMS')
    SITE_URL = os.getenv('SITE_URL', 'https://yourdomain.com')

    # Listing sizes
    HOMEPAGE_PAGE_SIZE = int(os.getenv('HOMEPAGE_PAGE_SIZE', '10'))
    SEARCH_LIMIT = int(os.getenv('SEARCH_LIMIT', '20'))
    ADMIN_PAGE_SIZE = int(os.getenv('ADMIN_PAGE_SIZE', '50'))

    # Port for local server
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
