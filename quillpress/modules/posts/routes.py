"""
Posts Admin Routes
==================

Dashboard, editor and the save/update/delete actions.
Actions redirect to the dashboard; a store failure becomes a 500 carrying the error message.
"""

from flask import redirect, render_template, request, url_for

from quillpress.core.config import get_config_value
from quillpress.core.logging_service import logger
from quillpress.modules.auth import admin_api_required, admin_page_required

from . import posts_bp
from .database import (
    count_posts_db,
    create_post_db,
    delete_post_db,
    get_post_by_slug_db,
    list_posts_db,
    timestamp,
    update_post_db,
)

REQUIRED_FIELDS = ('title', 'slug', 'content')


def _read_post_form():
    """Common article fields from the submitted form"""
    return {
        'title': request.form.get('title', '').strip(),
        'slug': request.form.get('slug', '').strip(),
        'content': request.form.get('content', ''),
        'excerpt': request.form.get('excerpt') or None,
        'published': bool(request.form.get('published')),
    }


def _missing_fields(data):
    return [field for field in REQUIRED_FIELDS if not data[field]]


def _error_response(prefix, error):
    return f"{prefix}: {error}", 500, {'Content-Type': 'text/plain; charset=utf-8'}


@posts_bp.route('/dashboard')
@admin_page_required
def dashboard():
    """Every article, newest first, paginated"""
    page_size = int(get_config_value('ADMIN_PAGE_SIZE', 50))
    page = max(request.args.get('page', 1, type=int) or 1, 1)

    try:
        posts = list_posts_db(published_only=False, limit=page_size, offset=(page - 1) * page_size)
        total = count_posts_db()
    except Exception as e:
        return _error_response('Error', e)

    total_pages = max((total + page_size - 1) // page_size, 1)
    return render_template('posts/dashboard.html', posts=posts, page=page,
                           total_pages=total_pages, total=total)


@posts_bp.route('/new')
@admin_page_required
def new_post():
    return render_template('posts/editor.html', post=None)


@posts_bp.route('/save', methods=['POST'])
@admin_api_required
def save_post():
    """Create article"""
    data = _read_post_form()
    missing = _missing_fields(data)
    if missing:
        return f"Missing required fields: {', '.join(missing)}", 400

    now = timestamp()
    try:
        create_post_db(
            data['slug'], data['title'], data['content'],
            excerpt=data['excerpt'],
            published=data['published'],
            cover_image_key=request.form.get('cover_image_key') or None,
            created_at=now,
            updated_at=now,
        )
    except Exception as e:
        return _error_response('Error saving post', e)

    logger.log_user_action('posts', 'post created', {'slug': data['slug'], 'published': data['published']})
    return redirect(url_for('posts_admin.dashboard'))


@posts_bp.route('/edit/<path:slug>')
@admin_page_required
def edit_post(slug):
    """Pre-filled editor for an article in any publish state"""
    try:
        post = get_post_by_slug_db(slug)
    except Exception as e:
        return _error_response('Error', e)

    if not post:
        return 'Post not found', 404

    return render_template('posts/editor.html', post=post)


@posts_bp.route('/update', methods=['POST'])
@admin_api_required
def update_post():
    """Overwrite the article identified by original_slug"""
    original_slug = request.form.get('original_slug', '')
    data = _read_post_form()
    missing = _missing_fields(data)
    if missing:
        return f"Missing required fields: {', '.join(missing)}", 400

    try:
        updated = update_post_db(
            original_slug, data['slug'], data['title'], data['content'],
            excerpt=data['excerpt'],
            published=data['published'],
            updated_at=timestamp(),
            cover_image_key=request.form.get('cover_image_key'),
        )
    except Exception as e:
        return _error_response('Error updating post', e)

    if updated:
        logger.log_user_action('posts', 'post updated', {'original_slug': original_slug, 'slug': data['slug']})
    else:
        logger.warning('posts', f"Update matched no post: {original_slug}")
    return redirect(url_for('posts_admin.dashboard'))


@posts_bp.route('/delete', methods=['POST'])
@admin_api_required
def delete_post():
    """Hard delete; deleting a missing slug still redirects"""
    slug = request.form.get('slug', '')

    try:
        deleted = delete_post_db(slug)
    except Exception as e:
        return _error_response('Error deleting post', e)

    if deleted:
        logger.log_user_action('posts', 'post deleted', {'slug': slug})
    return redirect(url_for('posts_admin.dashboard'))
