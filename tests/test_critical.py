"""
Critical Integration Tests for Quillpress
========================================

Focused tests covering the integration points most likely to break.
Run with: pytest tests/test_critical.py -v

NOTE: pytest is listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import os

from flask import Flask

from quillpress import Quillpress


# ---------------------------------------------------------------------------
# 1. Framework initialisation -- Quillpress(app) does not raise
# ---------------------------------------------------------------------------

def test_framework_initialisation(app_config):
    """Quillpress(app) boots without errors and stores itself on the app."""
    app = Flask(__name__)
    app.config.update(app_config)

    quillpress = Quillpress(app, {'brand_name': 'Field Notes'})

    assert "quillpress" in app.extensions
    assert app.extensions["quillpress"] is quillpress


# ---------------------------------------------------------------------------
# 2. Config resolution -- DB paths are non-empty and contain expected names
# ---------------------------------------------------------------------------

def test_config_db_paths(app):
    """DB_DIR, POSTS_DB and LOGS_DB resolve to non-empty paths."""
    assert app.config["DB_DIR"], "DB_DIR must not be empty"
    assert "posts.db" in app.config["POSTS_DB"]
    assert "logs.db" in app.config["LOGS_DB"]


def test_plain_password_is_hashed_at_startup(app_config):
    """A plain ADMIN_PASSWORD is replaced by a hash and never kept in config."""
    config = dict(app_config)
    config.pop('ADMIN_PASSWORD_HASH')
    config['ADMIN_PASSWORD'] = 'plain-text-secret'

    app = Flask(__name__)
    app.config.update(config)
    Quillpress(app)

    assert 'ADMIN_PASSWORD' not in app.config
    assert app.config['ADMIN_PASSWORD_HASH']
    assert 'plain-text-secret' not in app.config['ADMIN_PASSWORD_HASH']


# ---------------------------------------------------------------------------
# 3. Blueprint registration -- all expected modules are registered
# ---------------------------------------------------------------------------

EXPECTED_MODULES = [
    "auth",
    "posts_public",
    "posts",
    "images",
    "static_fallback",
]


def test_all_blueprints_registered(app):
    registered = app.extensions["quillpress"].get_registered_modules()

    assert registered == EXPECTED_MODULES, (
        f"Unexpected module registration order: {registered}"
    )


def test_static_fallback_can_be_disabled(app_config):
    app = Flask(__name__)
    app.config.update(app_config)
    Quillpress(app, {'features': {'static_fallback': False}})

    assert "static_fallback" not in app.extensions["quillpress"].get_registered_modules()
    rules = [rule.rule for rule in app.url_map.iter_rules()]
    assert "/<path:filename>" not in rules


# ---------------------------------------------------------------------------
# 4. Routing table -- every route exists with the expected methods
# ---------------------------------------------------------------------------

EXPECTED_ROUTES = {
    "/": "GET",
    "/posts/<path:slug>": "GET",
    "/search": "GET",
    "/sitemap.xml": "GET",
    "/robots.txt": "GET",
    "/admin": "GET",
    "/login": "POST",
    "/logout": "POST",
    "/admin/dashboard": "GET",
    "/admin/new": "GET",
    "/admin/save": "POST",
    "/admin/edit/<path:slug>": "GET",
    "/admin/update": "POST",
    "/admin/delete": "POST",
    "/admin/upload": "POST",
    "/images/<path:filename>": "GET",
    "/<path:filename>": "GET",
}


def test_routing_table(app):
    methods_by_rule = {rule.rule: rule.methods for rule in app.url_map.iter_rules()}

    for path, method in EXPECTED_ROUTES.items():
        assert path in methods_by_rule, f"Route {path} not found. Routes: {sorted(methods_by_rule)}"
        assert method in methods_by_rule[path], f"{path} does not accept {method}"


def test_post_only_routes_fall_through_to_not_found(client):
    """A GET on a POST-only action is not an action; the fallback answers 404."""
    response = client.get("/login")
    assert response.status_code == 404
    assert response.get_data(as_text=True) == "404 Not Found"


# ---------------------------------------------------------------------------
# 5. Template context -- quillpress_config and brand_name are injected
# ---------------------------------------------------------------------------

def test_template_context_injection(app):
    with app.test_request_context("/"):
        ctx = {}
        for func in app.template_context_processors[None]:
            ctx.update(func())

        assert "quillpress_config" in ctx, "quillpress_config missing from template context"
        assert isinstance(ctx["quillpress_config"], dict)
        assert ctx["brand_name"] == "Test Blog"


def test_template_filters_registered(app):
    assert "format_date" in app.jinja_env.filters
    assert callable(app.jinja_env.filters["format_date"])


# ---------------------------------------------------------------------------
# 6. Database directory creation
# ---------------------------------------------------------------------------

def test_database_dir_creation(tmp_dir, app_config):
    """The configured DB_DIR is created on disk and the posts table exists."""
    target = os.path.join(tmp_dir, "sub", "databases")
    config = dict(app_config)
    config["DB_DIR"] = target
    config["POSTS_DB"] = os.path.join(target, "posts.db")
    config["LOGS_DB"] = os.path.join(target, "logs.db")

    app = Flask(__name__)
    app.config.update(config)
    Quillpress(app)

    assert os.path.isdir(target), f"DB_DIR was not created at {target}"
    assert os.path.isfile(config["POSTS_DB"])


def test_database_paths_follow_db_dir(tmp_dir, app_config, monkeypatch):
    """Overriding only DB_DIR places both databases inside it."""
    monkeypatch.delenv("POSTS_DB", raising=False)
    monkeypatch.delenv("LOGS_DB", raising=False)
    target = os.path.join(tmp_dir, "elsewhere")
    config = {k: v for k, v in app_config.items() if k not in ("POSTS_DB", "LOGS_DB")}
    config["DB_DIR"] = target

    app = Flask(__name__)
    app.config.update(config)
    Quillpress(app)

    assert app.config["POSTS_DB"] == os.path.join(target, "posts.db")
    assert app.config["LOGS_DB"] == os.path.join(target, "logs.db")
    assert os.path.isfile(app.config["POSTS_DB"])
