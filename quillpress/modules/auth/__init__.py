"""
Quillpress Auth Module

Single-admin authentication:
- Login page and credential check
- Cookie session flag (auth=true)
- Logout
- Page/API guards used by the other admin modules
"""

from flask import Blueprint

auth_bp = Blueprint(
    'auth',
    __name__,
    template_folder='templates'
)

from . import routes
from .utils import admin_api_required, admin_page_required, is_authenticated

__all__ = ['auth_bp', 'admin_api_required', 'admin_page_required', 'is_authenticated']
