"""
Quillpress Modules
==================

Flask blueprint modules that make up the blog.
"""

__all__ = ['auth', 'posts', 'posts_public', 'images']
