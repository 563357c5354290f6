"""
Routes package initialization
"""

from convenia.routes.auth_routes import auth_bp
from convenia.routes.user_routes import user_bp
from convenia.routes.request_routes import request_bp

__all__ = ['auth_bp', 'user_bp', 'request_bp']
