from datetime import datetime

from flask import Response, render_template, request

from quillpress.core.config import get_config_value
from quillpress.modules.posts.database import (
    get_post_by_slug_db,
    get_sitemap_entries_db,
    list_posts_db,
    search_posts_db,
)

from . import posts_public_bp


def format_date(value):
    """'2026-10-18T09:30:00+00:00' -> '18 October 2026'"""
    if not value:
        return ''
    try:
        date = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return value
    return f"{date.day} {date.strftime('%B %Y')}"


# Add the filter to the blueprint
@posts_public_bp.app_template_filter('format_date')
def format_date_filter(value):
    return format_date(value)


@posts_public_bp.route('/')
def homepage():
    """Latest published articles"""
    limit = int(get_config_value('HOMEPAGE_PAGE_SIZE', 10))
    try:
        posts = list_posts_db(published_only=True, limit=limit)
    except Exception as e:
        return f"Error: {e}", 500

    return render_template('posts_public/home.html', posts=posts)


@posts_public_bp.route('/posts/<path:slug>')
def post_detail(slug):
    """Individual article page - drafts are not reachable here"""
    try:
        post = get_post_by_slug_db(slug, published_only=True)
    except Exception as e:
        return f"Error: {e}", 500

    if not post:
        return '404 - Post Not Found', 404

    return render_template('posts_public/post.html', post=post)


@posts_public_bp.route('/search')
def search():
    query = request.args.get('q', '').strip()

    results = []
    if query:
        try:
            results = search_posts_db(query, int(get_config_value('SEARCH_LIMIT', 20)))
        except Exception as e:
            return f"Error: {e}", 500

    return render_template('posts_public/search.html', query=query, results=results)


@posts_public_bp.route('/sitemap.xml')
def sitemap():
    try:
        entries = get_sitemap_entries_db()
    except Exception as e:
        return f"Error generating sitemap: {e}", 500

    site_url = get_config_value('SITE_URL', '').rstrip('/')
    xml = render_template('posts_public/sitemap.xml', site_url=site_url, entries=entries)
    return Response(xml, mimetype='application/xml')


@posts_public_bp.route('/robots.txt')
def robots():
    site_url = get_config_value('SITE_URL', '').rstrip('/')
    body = f"User-agent: *\nAllow: /\nSitemap: {site_url}/sitemap.xml\n"
    return Response(body, mimetype='text/plain')
