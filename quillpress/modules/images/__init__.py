"""
Images Module
=============

Image upload for articles (admin) and public byte-serving from the blob store.
"""

from flask import Blueprint

images_bp = Blueprint('images', __name__)

from . import routes

__all__ = ['images_bp']
