"""
Posts Database
==============

Content store for articles: one `posts` table addressed by slug.
Every function raises on store failure; handlers turn that into a 500.
"""

from datetime import datetime, timezone

from quillpress.core.config import get_config_value
from quillpress.core.database import Database
from quillpress.core.logging_service import logger

POST_COLUMNS = 'slug, title, content, excerpt, published, cover_image_key, created_at, updated_at'


def utc_now():
    return datetime.now(timezone.utc)


def timestamp():
    """Write-time stamp for created_at / updated_at"""
    return utc_now().isoformat(timespec='microseconds')


def get_db_config():
    """Get posts database path"""
    return get_config_value('POSTS_DB', 'posts.db')


def _to_post(post):
    if post is not None:
        post['published'] = bool(post['published'])
    return post


def init_posts_db():
    """Initialize posts database"""
    posts_db = get_db_config()
    Database.ensure_dir(posts_db)

    with Database.connect(posts_db) as conn:
        cursor = conn.cursor()
        cursor.execute('''
            CREATE TABLE IF NOT EXISTS posts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                slug TEXT NOT NULL UNIQUE,
                title TEXT NOT NULL,
                content TEXT NOT NULL,
                excerpt TEXT,
                published INTEGER NOT NULL DEFAULT 0,
                cover_image_key TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        ''')

        cursor.execute('CREATE INDEX IF NOT EXISTS idx_posts_published ON posts(published)')
        cursor.execute('CREATE INDEX IF NOT EXISTS idx_posts_created_at ON posts(created_at)')
        conn.commit()


def list_posts_db(published_only=True, limit=None, offset=0):
    """Posts newest first; drafts included only when published_only is False"""
    where = 'WHERE published = 1' if published_only else ''
    query = f'SELECT {POST_COLUMNS} FROM posts {where} ORDER BY created_at DESC, id DESC'
    params = []
    if limit is not None:
        query += ' LIMIT ? OFFSET ?'
        params.extend([limit, offset])

    try:
        with Database.connect(get_db_config()) as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [_to_post(p) for p in Database.rows_to_dicts(cursor, cursor.fetchall())]
    except Exception as e:
        logger.error('posts', f"Error listing posts: {e}")
        raise


def count_posts_db(published_only=False):
    where = 'WHERE published = 1' if published_only else ''
    try:
        with Database.connect(get_db_config()) as conn:
            cursor = conn.cursor()
            cursor.execute(f'SELECT COUNT(*) FROM posts {where}')
            return cursor.fetchone()[0]
    except Exception as e:
        logger.error('posts', f"Error counting posts: {e}")
        raise


def get_post_by_slug_db(slug, published_only=False):
    """Get single post by slug, or None"""
    query = f'SELECT {POST_COLUMNS} FROM posts WHERE slug = ?'
    if published_only:
        query += ' AND published = 1'

    try:
        with Database.connect(get_db_config()) as conn:
            cursor = conn.cursor()
            cursor.execute(query + ' LIMIT 1', (slug,))
            return _to_post(Database.row_to_dict(cursor, cursor.fetchone()))
    except Exception as e:
        logger.error('posts', f"Error getting post by slug: {e}")
        raise


def search_posts_db(query, limit):
    """Published posts whose title or content contains query"""
    term = f'%{query}%'
    try:
        with Database.connect(get_db_config()) as conn:
            cursor = conn.cursor()
            cursor.execute(f'''
                SELECT {POST_COLUMNS} FROM posts
                WHERE published = 1 AND (title LIKE ? OR content LIKE ?)
                ORDER BY created_at DESC, id DESC
                LIMIT ?
            ''', (term, term, limit))
            return [_to_post(p) for p in Database.rows_to_dicts(cursor, cursor.fetchall())]
    except Exception as e:
        logger.error('posts', f"Error searching posts: {e}")
        raise


def create_post_db(slug, title, content, excerpt=None, published=False,
                   cover_image_key=None, created_at=None, updated_at=None):
    """Insert a new post. A duplicate slug raises sqlite3.IntegrityError."""
    try:
        with Database.connect(get_db_config()) as conn:
            cursor = conn.cursor()
            cursor.execute(f'''
                INSERT INTO posts ({POST_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            ''', (slug, title, content, excerpt, 1 if published else 0,
                  cover_image_key, created_at, updated_at))
            conn.commit()
            return cursor.lastrowid
    except Exception as e:
        logger.error('posts', f"Error creating post: {e}")
        raise


def update_post_db(original_slug, slug, title, content, excerpt=None, published=False,
                   updated_at=None, cover_image_key=None):
    """Overwrite the mutable fields of the post stored under original_slug.

    cover_image_key of None leaves the stored key untouched; an empty string clears it.
    Returns True if a row was updated.
    """
    fields = ['title = ?', 'slug = ?', 'excerpt = ?', 'content = ?', 'published = ?', 'updated_at = ?']
    values = [title, slug, excerpt, content, 1 if published else 0, updated_at]
    if cover_image_key is not None:
        fields.append('cover_image_key = ?')
        values.append(cover_image_key or None)
    values.append(original_slug)

    try:
        with Database.connect(get_db_config()) as conn:
            cursor = conn.cursor()
            cursor.execute(f"UPDATE posts SET {', '.join(fields)} WHERE slug = ?", values)
            conn.commit()
            return cursor.rowcount > 0
    except Exception as e:
        logger.error('posts', f"Error updating post: {e}")
        raise


def delete_post_db(slug):
    """Hard delete. Returns True if a row was removed."""
    try:
        with Database.connect(get_db_config()) as conn:
            cursor = conn.cursor()
            cursor.execute('DELETE FROM posts WHERE slug = ?', (slug,))
            conn.commit()
            return cursor.rowcount > 0
    except Exception as e:
        logger.error('posts', f"Error deleting post: {e}")
        raise


def get_sitemap_entries_db():
    """(slug, updated_at) pairs of published posts"""
    try:
        with Database.connect(get_db_config()) as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT slug, updated_at FROM posts WHERE published = 1 ORDER BY created_at DESC')
            return Database.rows_to_dicts(cursor, cursor.fetchall())
    except Exception as e:
        logger.error('posts', f"Error getting sitemap entries: {e}")
        raise
