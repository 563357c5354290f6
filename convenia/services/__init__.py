"""
Services package initialization
"""

from convenia.services.auth_service import AuthService, login_required, role_required
from convenia.services.user_service import UserService
from convenia.services.request_service import RequestService
from convenia.services.storage_service import DocumentStorage

__all__ = ['AuthService', 'login_required', 'role_required',
           'UserService', 'RequestService', 'DocumentStorage']
