"""
tests/conftest.py
"""

import os
import shutil
import tempfile

import pytest
from werkzeug.security import generate_password_hash

from quillpress import create_app

ADMIN_USERNAME = 'editor'
ADMIN_PASSWORD = 'correct-horse-battery'


@pytest.fixture
def tmp_dir():
    """Create a temporary directory for databases, uploads and assets, cleaned up after."""
    d = tempfile.mkdtemp(prefix="quillpress-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app_config(tmp_dir):
    return make_test_config(tmp_dir)


def make_test_config(base_dir):
    public_dir = os.path.join(base_dir, 'public')
    os.makedirs(public_dir, exist_ok=True)
    return {
        'TESTING': True,
        'SECRET_KEY': 'test-secret',
        'DB_DIR': os.path.join(base_dir, 'databases'),
        'POSTS_DB': os.path.join(base_dir, 'databases', 'posts.db'),
        'LOGS_DB': os.path.join(base_dir, 'databases', 'logs.db'),
        'UPLOAD_FOLDER': os.path.join(base_dir, 'uploads'),
        'PUBLIC_FOLDER': public_dir,
        'STORAGE_BACKEND': 'local',
        'ADMIN_USERNAME': ADMIN_USERNAME,
        'ADMIN_PASSWORD_HASH': generate_password_hash(ADMIN_PASSWORD),
        'SITE_URL': 'https://blog.example.com',
        'SITE_NAME': 'Test Blog',
    }


@pytest.fixture
def app(app_config):
    """Fully initialised app on temporary storage."""
    return create_app(app_config)


@pytest.fixture
def client(app):
    """Cookie jar off: each request carries exactly the Cookie header it is given."""
    return app.test_client(use_cookies=False)


@pytest.fixture
def auth_headers():
    """The session flag as a browser would send it after login."""
    return {'Cookie': 'auth=true'}


@pytest.fixture
def make_post(client, auth_headers):
    """Create an article through the admin save action."""
    def _make_post(slug, title=None, content='<p>Body</p>', published=True, **extra):
        data = {
            'slug': slug,
            'title': title or slug.replace('-', ' ').title(),
            'content': content,
        }
        if published:
            data['published'] = 'on'
        data.update(extra)
        response = client.post('/admin/save', data=data, headers=auth_headers)
        assert response.status_code == 302, response.get_data(as_text=True)
        return response
    return _make_post
