"""
Posts Admin Module
==================

Admin interface for article management.

Provides:
- Dashboard listing of every article (drafts included)
- Article creation and editing
- Draft/publish flag
- Hard delete
"""

from flask import Blueprint

posts_bp = Blueprint(
    'posts_admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

from . import routes

__all__ = ['posts_bp']
