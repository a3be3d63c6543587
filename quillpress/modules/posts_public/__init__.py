from flask import Blueprint

posts_public_bp = Blueprint('posts_public', __name__, template_folder='templates')

from . import routes

__all__ = ['posts_public_bp']
